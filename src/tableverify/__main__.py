from __future__ import annotations

import sys

from pydantic import ValidationError

from . import __version__
from .config import EngineSettings, env_key
from .reporting import build_logger
from .step_catalog import STEP_CATALOG


def main() -> int:
    if sys.version_info < (3, 11):
        raise SystemExit(
            "tableverify requires Python 3.11+. "
            f"Current interpreter: {sys.executable} (Python {sys.version.split()[0]})"
        )
    print(f"[tableverify doctor] version={__version__}")
    print(f"[tableverify doctor] sys.executable={sys.executable}")
    print(f"[tableverify doctor] sys.version={sys.version}")
    try:
        settings = EngineSettings.from_env()
    except ValidationError as exc:
        problems = "; ".join(f"{env_key(str(error['loc'][0]))}: {error['msg']}" for error in exc.errors())
        raise SystemExit(f"Invalid configuration: {problems}") from exc
    for line in settings.describe():
        print(f"[tableverify doctor] {line}")
    try:
        import playwright  # noqa: F401
    except ModuleNotFoundError:
        print("[tableverify doctor] playwright is not installed. Run `pip install -e .`.")
    else:
        print("[tableverify doctor] playwright available")
    logger = build_logger()
    logger.info("Doctor run with %s steps registered", len(STEP_CATALOG))
    for spec in STEP_CATALOG:
        print(f"[tableverify doctor] {spec.kind} {spec.phrase} -> {spec.method}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
