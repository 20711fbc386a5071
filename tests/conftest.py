"""Configuração do pytest para o relay de tarefas."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Isola settings cacheadas entre testes que alteram env."""
    from config.settings import (
        get_auth_settings,
        get_base_settings,
        get_relay_settings,
        get_store_settings,
    )

    getters = (get_auth_settings, get_base_settings, get_relay_settings, get_store_settings)
    for getter in getters:
        getter.cache_clear()
    yield
    for getter in getters:
        getter.cache_clear()
