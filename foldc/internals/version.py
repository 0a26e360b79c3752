from __future__ import annotations
import sys, platform, datetime, shutil

from foldc import __version__ as app_ver, __dev__ as is_dev

def _ensure_utf8_stdout() -> None:
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(encoding="utf-8")

def _get_versions(cc: str = "cc") -> dict[str, str]:
    return {
        "app": app_ver,
        "python": platform.python_version(),
        "cc": shutil.which(cc) or "not found",
    }

def print_banner(cc: str = "cc", stream=None) -> None:
    _ensure_utf8_stdout()
    stream = stream or sys.stdout
    v = _get_versions(cc)
    today = datetime.date.today().isoformat()

    # Only use ANSI styling if the stream is a TTY (interactive terminal)
    use_ansi = getattr(stream, "isatty", lambda: False)()

    if use_ansi:
        BOLD, DIM, RESET = "\x1b[1m", "\x1b[2m", "\x1b[0m"
    else:
        BOLD, DIM, RESET = "", "", ""

    dev_marker = " (dev)" if is_dev else ""
    print(
        f"{BOLD}foldc{RESET} • {v['app']}{dev_marker}\n"
        f"{DIM}Python {v['python']} • cc {v['cc']} • {today}{RESET}\n",
        file=stream,
    )
