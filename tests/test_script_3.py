def test_script_3_update_missing_note(workspace, run_flow):
    with open('examples/script_3.flow', 'r', encoding='utf-8') as f:
        source = f.read()
    run = run_flow(source, '')
    assert len(workspace.messages) == 1
    message = workspace.messages[0]
    assert message.type == 'system'
    assert message.role == 'model'
    assert 'Cannot update note. Note not found: "Missing"' in message.display_html
    assert run.error == 'Cannot update note. Note not found: "Missing"'
    # the run stops at the failing command
    assert 'never reached' not in workspace.action_log
