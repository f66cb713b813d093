from flowscript.arguments import parse_named_params, strip_quotes


def test_named_params():
    params = parse_named_params('title="Plan", content = "Step one"')
    assert params == {'title': 'Plan', 'content': 'Step one'}


def test_triple_quoted_params_take_precedence():
    assert parse_named_params('content="""a="b""""') == {'content': 'a="b"'}


def test_two_triple_quoted_params():
    params = parse_named_params('title="""x""", content="""y"""')
    assert params == {'title': 'x', 'content': 'y'}


def test_triple_quoted_params_keep_newlines():
    params = parse_named_params('title="t",\n content="""line 1\nline "2"\n"""')
    assert params == {'title': 't', 'content': 'line 1\nline "2"\n'}


def test_unmatched_text_is_ignored():
    assert parse_named_params('"positional", flag') == {}
    assert parse_named_params('') == {}


def test_strip_quotes():
    assert strip_quotes('  "hello"  ') == 'hello'
    assert strip_quotes('"""multi\nline"""') == 'multi\nline'
    assert strip_quotes('bare words') == 'bare words'
    assert strip_quotes('"unbalanced') == '"unbalanced'
