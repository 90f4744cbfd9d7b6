import importlib.util
from pathlib import Path

import pytest


def _load_guard():
    script = (
        Path(__file__).resolve().parent.parent / "scripts" / "check_core_imports.py"
    )
    spec = importlib.util.spec_from_file_location("check_core_imports", script)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None  # for mypy
    spec.loader.exec_module(module)
    return module


def test_core_import_guard_passes():
    exit_code = _load_guard().main()
    assert exit_code == 0, "core import guard failed"


@pytest.mark.parametrize(
    "source",
    [
        "from ..server import create_server\n",
        "from zendesk_mcp import server\n",
        "from zendesk_mcp.transports.http.app import build_http_app\n",
        "import uvicorn\n",
        "from starlette.responses import JSONResponse\n",
        "from mcp.server.lowlevel import Server\n",
        "from ...transports.http import config\n",
    ],
)
def test_core_import_guard_flags_boundary_violations(tmp_path, capsys, source):
    core = tmp_path / "src" / "zendesk_mcp" / "core"
    (core / "tools").mkdir(parents=True)
    (core / "__init__.py").write_text("")
    nested = source.startswith("from ...")
    target = (core / "tools" if nested else core) / "leaky.py"
    target.write_text(source)

    assert _load_guard().main(core) == 1
    assert "forbidden import" in capsys.readouterr().err


@pytest.mark.parametrize(
    "source",
    [
        "from mcp import types\n",
        "from .client import ZendeskClient\n",
        "from zendesk_mcp.core.registry import ToolSpec\n",
        "import httpx\n",
    ],
)
def test_core_import_guard_allows_core_dependencies(tmp_path, source):
    core = tmp_path / "src" / "zendesk_mcp" / "core"
    core.mkdir(parents=True)
    (core / "ok.py").write_text(source)

    assert _load_guard().main(core) == 0
