import asyncio
from types import SimpleNamespace

from flowscript.config import Settings
from flowscript.std.genai import DEFAULT_MODEL, GeminiGenerator, MissingKeyGenerator


class FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.requests = []

    async def generate_content(self, model, contents, config):
        self.requests.append((model, contents, config))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def fake_client(models):
    return SimpleNamespace(aio=SimpleNamespace(models=models))


def test_generate_with_system_instruction():
    models = FakeModels(text='Hi!')
    generator = GeminiGenerator(model='test-model', client=fake_client(models))
    assert asyncio.run(generator.generate('Hello', 'Be nice')) == 'Hi!'
    model, contents, config = models.requests[0]
    assert (model, contents) == ('test-model', 'Hello')
    assert config.system_instruction == 'Be nice'
    assert config.temperature == 0.7


def test_generate_without_system_instruction():
    models = FakeModels(text=None)
    generator = GeminiGenerator(client=fake_client(models))
    assert asyncio.run(generator.generate('Hello')) == ''
    model, _, config = models.requests[0]
    assert model == DEFAULT_MODEL
    assert config.system_instruction is None


def test_failures_are_reported_as_text():
    generator = GeminiGenerator(client=fake_client(FakeModels(error=RuntimeError('quota'))))
    assert asyncio.run(generator.generate('Hello')) == 'Error: quota'


def test_missing_key_generator():
    reply = asyncio.run(MissingKeyGenerator().generate('Hello'))
    assert reply.startswith('Error')


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv('GEMINI_API_KEY', 'k')
    monkeypatch.setenv('FLOWSCRIPT_MODEL', 'm')
    assert Settings.from_env(load_dotenv_file=False) == Settings(api_key='k', model='m')
    monkeypatch.delenv('GEMINI_API_KEY')
    monkeypatch.delenv('FLOWSCRIPT_MODEL')
    assert Settings.from_env(load_dotenv_file=False) == Settings(api_key=None, model=DEFAULT_MODEL)
