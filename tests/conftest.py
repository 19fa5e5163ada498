import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "lib")))

from sqlsplits.config import close_output, config  # noqa: E402
from sqlsplits.lexer import lexer  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_config():
    saved = dict(vars(config))
    saved["variables"] = dict(config.variables)

    config.output = None
    config.pager = None

    yield config

    close_output()

    config.__dict__.clear()
    config.__dict__.update(saved)
    lexer.set_selected(False)
