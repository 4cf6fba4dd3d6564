import pytest

from erlterm.types.terms import Atom, ErlangString, ImproperList, format_term


class TestAtom:
    def test_str(self):
        assert str(Atom("ok")) == "ok"

    def test_equality_and_hash(self):
        assert Atom("ok") == Atom("ok")
        assert {Atom("ok"): 1}[Atom("ok")] == 1

    def test_not_equal_to_str(self):
        assert Atom("ok") != "ok"

    def test_frozen(self):
        a = Atom("ok")
        with pytest.raises(AttributeError):
            a.name = "error"  # type: ignore[misc]


class TestErlangString:
    def test_sequence_of_ints(self):
        s = ErlangString(b"\x00\x7f\xff")
        assert len(s) == 3
        assert list(s) == [0, 127, 255]
        assert s[1] == 127
        assert s[-1] == 255

    def test_slice_gives_list(self):
        assert ErlangString(b"abcd")[1:3] == [98, 99]

    def test_to_list(self):
        assert ErlangString(b"hi").to_list() == [104, 105]

    def test_str_is_text(self):
        assert str(ErlangString(b"hello")) == "hello"


class TestImproperList:
    def test_iteration_includes_tail(self):
        lst = ImproperList((1, 2), 3)
        assert list(lst) == [1, 2, 3]
        assert len(lst) == 3

    def test_tail_is_distinguishable(self):
        lst = ImproperList((1, 2), 3)
        assert lst.tail == 3
        assert lst.elements == (1, 2)
        assert lst != [1, 2, 3]

    def test_equality(self):
        assert ImproperList((1,), Atom("x")) == ImproperList((1,), Atom("x"))
        assert ImproperList((1,), 2) != ImproperList((1, 2), 3)


class TestFormatTerm:
    @pytest.mark.parametrize(
        ("term", "expected"),
        [
            (42, "42"),
            (-(2**70), str(-(2**70))),
            (Atom("ok"), "ok"),
            (b"text", "text"),
            (b"\xff", "\\xff"),
            (ErlangString(b"abc"), "abc"),
            ([], "[]"),
            ([1, Atom("a")], "[1,a]"),
            (ImproperList((1, 2), 3), "[1,2|3]"),
            ((), "{}"),
            ((Atom("ok"), 1), "{ok,1}"),
            ({"k": 1}, "#{k => 1}"),
            ({}, "#{}"),
            ((Atom("a"), [b"x", {"n": (1,)}]), "{a,[x,#{n => {1}}]}"),
        ],
    )
    def test_display_form(self, term, expected):
        assert format_term(term) == expected

    def test_atom_and_binary_collide(self):
        assert format_term(Atom("a")) == format_term(b"a")

    @pytest.mark.parametrize("value", [1.5, None, "str", True, object()])
    def test_rejects_non_terms(self, value):
        with pytest.raises(TypeError, match="Not a decoded term"):
            format_term(value)
