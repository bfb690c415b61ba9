import pytest

from authkeys.options import OptionKind, Options, decode_options, encode_options


def test_flag_option():
    opts = decode_options("no-pty")
    assert opts["no-pty"] is True
    assert opts.kind("no-pty") is OptionKind.FLAG
    assert encode_options(opts) == "no-pty"


def test_quoted_value_unwrapped():
    opts = decode_options('command="ls -l"')
    assert opts["command"] == "ls -l"
    assert encode_options(opts) == 'command="ls -l"'


def test_unquoted_value_rendered_quoted():
    opts = decode_options("tunnel=0")
    assert opts["tunnel"] == "0"
    assert encode_options(opts) == 'tunnel="0"'


def test_repeated_option_becomes_list():
    opts = decode_options('from="a.com",from="b.com",from="c.com"')
    assert opts["from"] == ["a.com", "b.com", "c.com"]
    assert opts.kind("from") is OptionKind.MANY
    assert encode_options(opts) == 'from="a.com",from="b.com",from="c.com"'


def test_value_split_on_first_equals():
    opts = decode_options('environment="PATH=/bin"')
    assert opts["environment"] == "PATH=/bin"


def test_names_are_case_sensitive():
    opts = decode_options('from="a",From="b"')
    assert opts["from"] == "a"
    assert opts["From"] == "b"


def test_render_follows_insertion_order():
    opts = decode_options('no-pty,from="x",command="y"')
    assert list(opts) == ["no-pty", "from", "command"]
    assert encode_options(opts) == 'no-pty,from="x",command="y"'


def test_empty_options():
    assert len(decode_options("")) == 0
    assert encode_options(Options()) == ""


def test_set_get_delete():
    opts = Options()
    opts["from"] = "quack@quack.com"
    opts["no-pty"] = True
    opts["permitopen"] = ["h1:22", "h2:22"]
    assert opts.get("from") == "quack@quack.com"
    assert encode_options(opts) == 'from="quack@quack.com",no-pty,permitopen="h1:22",permitopen="h2:22"'
    del opts["from"]
    assert "from" not in opts
    assert opts.get("from") is None
    with pytest.raises(KeyError):
        opts["from"]


def test_returned_list_is_a_copy():
    opts = decode_options('from="a",from="b"')
    values = opts["from"]
    values.append("c")
    assert opts["from"] == ["a", "b"]


def test_add_promotes_to_list():
    opts = Options({"from": "a"})
    opts.add("from", "b")
    assert opts["from"] == ["a", "b"]


def test_false_value_rejected():
    opts = Options()
    with pytest.raises(ValueError):
        opts["no-pty"] = False
