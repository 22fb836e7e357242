"""
Check Provider Helpers

Small filesystem helpers shared by the built-in check providers, and the
decorator that names the section a provider produces.
"""

from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from ..models import ChecklistItem, CheckStatus

F = TypeVar("F", bound=Callable)


def check_provider(section_name: str, required: bool = True) -> Callable[[F], F]:
    """
    Attach the section name to a provider.

    The evaluator uses it to label the section when the provider fails.
    """
    def decorate(func: F) -> F:
        func.section_name = section_name
        func.section_required = required
        return func
    return decorate


def any_exists(root: Path, *relative: str) -> bool:
    """True if any of the relative paths exists under root."""
    return any((root / rel).exists() for rel in relative)


def find_files(root: Path, *patterns: str) -> List[Path]:
    """Glob several patterns under root, without duplicates."""
    found = []
    seen = set()
    for pattern in patterns:
        for path in sorted(root.glob(pattern)):
            if path.is_file() and path not in seen:
                seen.add(path)
                found.append(path)
    return found


def read_text(path: Path) -> Optional[str]:
    """Read a text file, None if it is missing or unreadable."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def manual_item(
    item_id: str,
    name: str,
    message: str,
    required: bool = False,
    automated: bool = False,
) -> ChecklistItem:
    """Item that cannot be verified from the files and needs a human."""
    return ChecklistItem(
        id=item_id,
        name=name,
        status=CheckStatus.SKIP,
        required=required,
        message=message,
        automated=automated,
    )
