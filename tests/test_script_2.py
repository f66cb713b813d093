def test_script_2_pass_prompt_creates_note(generator, workspace, run_flow):
    with open('examples/script_2.flow', 'r', encoding='utf-8') as f:
        source = f.read()
    run = run_flow(source, 'anything')
    assert generator.calls == []
    assert [(n.title, n.content) for n in workspace.notes] == [('T', 'C')]
    # answer stays empty so nothing is posted
    assert workspace.messages == []
    assert run.error is None
