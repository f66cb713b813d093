from flowscript.context import ExecutionContext, resolve_variables


def test_resolve_plain_variable():
    assert resolve_variables('[x]', {'x': 'hello'}) == 'hello'


def test_unresolved_token_passes_through():
    assert resolve_variables('[missing]', {}) == '[missing]'
    assert resolve_variables('keep [a.b] and [c]', {'c': 'C'}) == 'keep [a.b] and C'


def test_dotted_path_into_json_string():
    context = {'meta': '{"title":"Foo","tags":["x","y"]}'}
    assert resolve_variables('[meta.title]', context) == 'Foo'
    assert resolve_variables('[meta.tags.1]', context) == 'y'
    assert resolve_variables('[meta.author]', context) == '[meta.author]'


def test_bare_json_string_is_returned_verbatim():
    assert resolve_variables('[meta]', {'meta': '{"title":"Foo"}'}) == '{"title":"Foo"}'


def test_broken_json_stops_descent():
    assert resolve_variables('[meta.title]', {'meta': '{not json'}) == '[meta.title]'


def test_structured_values_are_stringified():
    context = {'n': 3, 'flag': True, 'nothing': None, 'items': [1, 2], 'obj': {'a': {'b': 2}}}
    assert resolve_variables('[n] [flag] [nothing] [items]', context) == '3 true null [1, 2]'
    assert resolve_variables('[obj.a.b]', context) == '2'


def test_execution_context_seeds_prompt_and_answer():
    context = ExecutionContext(prompt='Hi')
    assert context['prompt'] == 'Hi'
    assert context.answer == ''
    context.answer = 'Done'
    assert context.resolve('[prompt] -> [answer]') == 'Hi -> Done'
    assert 'answer' in context
