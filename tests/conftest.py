import locale as locale_mod
import os
from pathlib import Path
from unittest import mock

import pytest


@pytest.fixture(autouse=True)
def git_empty_config(tmp_path: Path):
    """Ensure git and libgit2 run with empty configuration."""
    git_config = tmp_path / "ignorance-is-bliss"
    git_config.write_text("[user]\n\tname = The Man in the Moon\n\temail = man@moon.luna\n")
    with mock.patch.dict(
        os.environ,
        {
            "GIT_CONFIG_NOSYSTEM": "true",
            "GIT_CONFIG_GLOBAL": str(git_config),
            "GIT_AUTHOR_DATE": "2024-01-01T12:00:00+00:00",
            "GIT_COMMITTER_DATE": "2024-01-01T12:00:00+00:00",
        },
    ):
        yield git_config


@pytest.fixture(autouse=True)
def locale():
    """Ensure consistent locale and that modifications stay isolated."""
    saved_locale_settings = {
        category: locale_mod.getlocale(getattr(locale_mod, category))
        for category in dir(locale_mod)
        if category.startswith("LC_") and category != "LC_ALL"
    }

    locale_mod.setlocale(locale_mod.LC_ALL, "C.UTF-8")

    yield locale_mod

    for category, locale_settings in saved_locale_settings.items():
        locale_mod.setlocale(getattr(locale_mod, category), locale_settings)
