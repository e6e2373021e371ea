"""Install ``nomonic check-staged`` as a git pre-commit hook."""

from __future__ import annotations

import enum
import logging
import stat
from pathlib import Path

logger = logging.getLogger(__name__)

HOOK_COMMAND = "nomonic check-staged"
HOOK_COMMENT = "# Check for BIP39 seed phrases (nomonic)"
SHEBANG = "#!/usr/bin/env bash"
HOOK_LINE = f"{HOOK_COMMAND} || exit 1"


class HookStatus(enum.Enum):
    CREATED = "created"
    PREPENDED = "prepended"
    ALREADY_PRESENT = "already_present"
    SYMLINK_SKIPPED = "symlink_skipped"


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def install_pre_commit_hook(repo_root: str | Path = ".") -> HookStatus:
    """Add the seed phrase check to ``.git/hooks/pre-commit``.

    An existing hook keeps its body (minus its shebang) after the check. A
    symlinked hook is left untouched since its target may be shared.
    """
    git_dir = Path(repo_root) / ".git"
    if not git_dir.is_dir():
        raise FileNotFoundError(f"Not a git repository: {Path(repo_root).resolve()}")

    hook = git_dir / "hooks" / "pre-commit"
    if hook.is_symlink():
        logger.warning(f"{hook} is a symlink; add '{HOOK_COMMAND}' to it manually")
        return HookStatus.SYMLINK_SKIPPED

    if hook.exists():
        existing = hook.read_text(encoding="utf-8")
        if HOOK_COMMAND in existing:
            return HookStatus.ALREADY_PRESENT
        body = "\n".join(line for line in existing.split("\n") if not line.startswith("#!/"))
        hook.write_text(f"{SHEBANG}\n{HOOK_COMMENT}\n{HOOK_LINE}\n\n{body}", encoding="utf-8")
        status = HookStatus.PREPENDED
    else:
        hook.parent.mkdir(parents=True, exist_ok=True)
        hook.write_text(f"{SHEBANG}\n\n{HOOK_COMMENT}\n{HOOK_LINE}\n", encoding="utf-8")
        status = HookStatus.CREATED

    _make_executable(hook)
    logger.info(f"Pre-commit hook {status.value}: {hook}")
    return status
