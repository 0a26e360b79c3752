"""
Test metadata parsing for the foldc end-to-end fixtures.

JSON has no comments, so each fixture `tests/e2e/<name>.json` may have a
sibling `<name>.expect` file holding the expectations as comment lines:

# EXPECT_STDOUT_EXACT: "3\\nhello\\n"
# EXPECT_STDOUT_CONTAINS: "true"
# EXPECT_STDERR_CONTAINS: "CE0101"
# EXPECT_RUNTIME_EXIT: 0
# TIMEOUT_SECONDS: 10
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class CaseMetadata:
    """Expected behaviour of one fixture."""

    # Runtime expectations
    expect_runtime_exit: Optional[int] = None
    expect_stdout_contains: List[str] = field(default_factory=list)
    expect_stdout_exact: Optional[str] = None

    # Compiler expectations
    expect_stderr_contains: List[str] = field(default_factory=list)

    timeout_seconds: int = 10

    @property
    def requires_runtime(self) -> bool:
        return (self.expect_runtime_exit is not None or
                bool(self.expect_stdout_contains) or
                self.expect_stdout_exact is not None)


def _unquote(value: str) -> str:
    if value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    return value.replace('\\n', '\n').replace('\\t', '\t')


def parse_case_metadata(case_file: Path) -> CaseMetadata:
    """
    Parse the `.expect` file next to a fixture.

    Args:
        case_file: Path to the .json fixture

    Returns:
        CaseMetadata with parsed expectations (all defaults if there is no .expect file)
    """
    metadata = CaseMetadata()
    expect_file = case_file.with_suffix(".expect")
    if not expect_file.exists():
        return metadata

    for line in expect_file.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line.startswith('#'):
            continue

        directive, _, value = line[1:].strip().partition(':')
        value = value.strip()

        if directive == 'EXPECT_RUNTIME_EXIT':
            metadata.expect_runtime_exit = int(value)
        elif directive == 'EXPECT_STDOUT_CONTAINS':
            metadata.expect_stdout_contains.append(_unquote(value))
        elif directive == 'EXPECT_STDOUT_EXACT':
            metadata.expect_stdout_exact = _unquote(value)
        elif directive == 'EXPECT_STDERR_CONTAINS':
            metadata.expect_stderr_contains.append(_unquote(value))
        elif directive == 'TIMEOUT_SECONDS':
            metadata.timeout_seconds = int(value)
        else:
            print(f"Warning: unknown directive in {expect_file}: {directive}")

    return metadata


def get_case_category(case_file: Path) -> str:
    """
    Determine the expected compiler outcome from the filename.

    Returns:
        'error': Should fail translation (test_err_*)
        'success': Should translate (test_*)
    """
    if case_file.name.startswith('test_err_'):
        return 'error'
    return 'success'
