"""
tests.test_imports
~~~~~~~~~~~~~~~~~~
Each module must import cleanly as the first project import of a fresh
interpreter.  The DRF settings name renderers and an exception handler from
``common``, so import order between ``common`` and ``rest_framework.views``
must not matter.
"""
from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.mark.parametrize(
    "module",
    [
        "common.exceptions",
        "common.graphql_client",
        "common.yaml_codec",
        "apps.credentials.services",
        "apps.exporters.services",
    ],
)
def test_module_imports_before_drf_views(module):
    env = {**os.environ, "DJANGO_SETTINGS_MODULE": "config.settings.test"}
    code = (
        "import django; django.setup(); "
        f"import {module}; "
        "import rest_framework.views; "
        "from rest_framework.settings import api_settings; "
        "api_settings.DEFAULT_RENDERER_CLASSES; api_settings.EXCEPTION_HANDLER"
    )
    result = subprocess.run(
        [sys.executable, "-c", code],
        cwd=PROJECT_ROOT,
        env=env,
        capture_output=True,
        text=True,
        timeout=60,
    )
    assert result.returncode == 0, result.stderr
