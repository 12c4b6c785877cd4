"""Default adapters satisfy the application-layer ports."""

from __future__ import annotations

from lib_typed_settings.adapters.dotenv.default import DefaultDotEnvLoader
from lib_typed_settings.adapters.env.default import DefaultEnvLoader
from lib_typed_settings.adapters.file_loaders.structured import JSONFileLoader, TOMLFileLoader, YAMLFileLoader
from lib_typed_settings.application import ports


def test_env_loader_contract() -> None:
    loader = DefaultEnvLoader(environ={"X": "1"})
    assert isinstance(loader, ports.EnvLoader)
    assert loader.load() == {"X": "1"}


def test_dotenv_loader_contract() -> None:
    assert isinstance(DefaultDotEnvLoader(), ports.DotEnvLoader)


def test_file_loader_contracts() -> None:
    for loader in (JSONFileLoader(), TOMLFileLoader(), YAMLFileLoader()):
        assert isinstance(loader, ports.FileLoader)

