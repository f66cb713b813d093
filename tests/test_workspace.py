import logging

from flowscript.std.workspace import InMemoryWorkspace, UserFile


def test_notes():
    workspace = InMemoryWorkspace()
    workspace.add_note('a', '1')
    assert workspace.get_note_content('a') == '1'
    assert workspace.get_note_content('A') is None
    assert workspace.update_note_content('a', '2')
    assert workspace.notes[0].content == '2'
    assert not workspace.update_note_content('b', 'x')
    assert workspace.delete_note_by_title('a')
    assert not workspace.delete_note_by_title('a')


def test_plan_matches_by_substring_ignoring_case():
    workspace = InMemoryWorkspace(plan=['Write Tests', 'Ship'])
    assert workspace.update_plan_status('tests', 'done')
    assert [(s.title, s.status) for s in workspace.plan] == [('Write Tests', 'done'), ('Ship', 'pending')]
    assert not workspace.update_plan_status('deploy', 'done')


def test_files_are_deleted_by_name():
    workspace = InMemoryWorkspace()
    workspace.add_file(UserFile(name='a.png', url='u1'))
    workspace.add_file(UserFile(name='b.png', url='u2'))
    assert workspace.get_file('b.png').url == 'u2'
    workspace.delete_file('a.png')
    workspace.delete_file('missing.png')
    assert [f.name for f in workspace.files] == ['b.png']


def test_music_and_actions(caplog):
    workspace = InMemoryWorkspace()
    assert workspace.current_track is None
    workspace.play_music('REUNITED')
    assert workspace.current_track == 'REUNITED'
    with caplog.at_level(logging.INFO, logger='flowscript.actions'):
        workspace.log_action('hello')
    assert workspace.action_log == ['hello']
    assert 'hello' in caplog.messages


def test_render_markdown():
    html = InMemoryWorkspace().render_markdown('# Title\n\n**bold**')
    assert '<h1>Title</h1>' in html
    assert '<strong>bold</strong>' in html
