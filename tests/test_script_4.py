def test_script_4_nested_override(generator, workspace, run_flow):
    with open('examples/script_4.flow', 'r', encoding='utf-8') as f:
        source = f.read()
    run = run_flow(source, 'X')
    assert generator.calls == []
    assert run.context.answer == 'Final: X'
    assert [m.text for m in workspace.messages] == ['Final: X']
    assert workspace.messages[0].type == 'text'
