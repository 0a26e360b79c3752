import shutil
import subprocess
from pathlib import Path

import pytest

from case_metadata import get_case_category, parse_case_metadata
from foldc.compiler.cli import main

E2E_DIR = Path(__file__).parent / "e2e"
CASES = sorted(E2E_DIR.glob("test_*.json"))
HAVE_CC = shutil.which("cc") is not None


@pytest.mark.parametrize("case", CASES, ids=lambda p: p.stem)
def test_translation_exit_code(case, tmp_path, capsys):
    expected = 2 if get_case_category(case) == "error" else 0
    assert main([str(case), "-o", str(tmp_path / "out.c")]) == expected
    err = capsys.readouterr().err
    for needle in parse_case_metadata(case).expect_stderr_contains:
        assert needle in err


@pytest.mark.skipif(not HAVE_CC, reason="no C compiler on PATH")
@pytest.mark.parametrize("case", [c for c in CASES if get_case_category(c) == "success"],
                         ids=lambda p: p.stem)
def test_native_output(case, tmp_path):
    metadata = parse_case_metadata(case)
    exe = tmp_path / "prog"
    assert main([str(case), "-o", str(tmp_path / "out.c"), "--exe", str(exe)]) == 0
    run = subprocess.run([str(exe)], capture_output=True, text=True,
                         timeout=metadata.timeout_seconds)
    assert run.returncode == (metadata.expect_runtime_exit or 0)
    if metadata.expect_stdout_exact is not None:
        assert run.stdout == metadata.expect_stdout_exact
    for needle in metadata.expect_stdout_contains:
        assert needle in run.stdout
