import pytest

from flowscript.commands import (
    ChangeMusic, CreateNote, Execute, Log, RunAgent, RunAI, SaveFile,
    parse_command, track_for_mood,
)
from flowscript.errors import CommandError


def test_parse_named_command():
    command = parse_command('createNote', 'title="Ideas", content="""- one\n- two"""')
    assert command == CreateNote(title='Ideas', content='- one\n- two')


def test_parse_quoted_command():
    assert parse_command('log', ' "Working on [prompt]" ') == Log(message='Working on [prompt]')


def test_save_file_reads_name_param():
    assert parse_command('saveFile', 'name="a.txt", url="u"') == SaveFile(file_name='a.txt', url='u')


def test_unknown_command():
    with pytest.raises(CommandError) as excinfo:
        parse_command('fly', '')
    assert str(excinfo.value) == 'Unknown Command: fly'
    assert excinfo.value.command == 'fly'


def test_agent_command_is_not_callable_by_name():
    with pytest.raises(CommandError, match='Unknown Command: runAI_Agent'):
        parse_command('runAI_Agent', '"hi"')


def test_run_ai_prompt_forms():
    assert RunAI.from_args('prompt="Summarize [x]"').prompt == 'Summarize [x]'
    assert RunAI.from_args('  "Just ask"  ').prompt == 'Just ask'
    assert RunAI.from_args('').prompt == ''


def test_run_agent_record():
    assert RunAgent.from_args('\n  "Go"\n', agent_id='writer') == RunAgent(agent_id='writer', prompt='Go')


def test_execute_strips_inputs_metadata():
    assert Execute.from_args('\nreturn 1\n, inputs=["a", "b"]').code == '\nreturn 1\n'
    assert Execute.from_args('return 2,inputs=[]').code == 'return 2'
    assert Execute.from_args('return (1, 2)').code == 'return (1, 2)'


def test_change_music_defaults_to_calm():
    assert ChangeMusic.from_args('') == ChangeMusic(mood='calm')


def test_track_for_mood():
    assert track_for_mood('focus') == 'MUSIC_MOOG'
    assert track_for_mood('sad') == 'MUSIC_FALLING'
    assert track_for_mood('energetic') == 'MUSIC_TELL'
    assert track_for_mood('calm') == 'REUNITED'
    assert track_for_mood('romantic') == 'MUSIC_TELL'
    assert track_for_mood('creative') == 'MUSIC_MOOG'
    assert track_for_mood('happy') == 'MUSIC_SILENCE'
    assert track_for_mood('calm but romantic') == 'MUSIC_TELL'
