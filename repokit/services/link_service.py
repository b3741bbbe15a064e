"""
Object-store link service for repokit.

Attaches a project's git directory to a shared objects repository by
symlinking a fixed set of entries, using paths relative to the project's
git directory so the pair can be relocated together.
"""

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from ..exit_codes import FilesystemError

logger = logging.getLogger(__name__)

ATTACHABLE_ITEMS = (
    "objects",
    "description",
    "info",
    "hooks",
    "svn",
    "rr-cache",
)


@dataclass
class LinkAction:
    """One planned symlink: ``target`` will point at ``link_value``."""
    item: str
    source: Path
    target: Path
    link_value: str


@dataclass
class AttachResult:
    """Result of attaching a git directory to an objects repository."""
    source_dir: Path
    target_dir: Path
    planned: List[LinkAction] = field(default_factory=list)
    linked: List[LinkAction] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    existing: List[str] = field(default_factory=list)
    created_dir: bool = False
    self_link: bool = False

    @property
    def linked_items(self) -> List[str]:
        return [action.item for action in self.linked]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source': str(self.source_dir),
            'target': str(self.target_dir),
            'linked': {a.item: a.link_value for a in self.linked},
            'missing': list(self.missing),
            'existing': list(self.existing),
            'created_dir': self.created_dir,
            'self_link': self.self_link,
        }


def relative_link(from_dir: Union[str, Path], to_path: Union[str, Path]) -> str:
    """
    Path of ``to_path`` relative to ``from_dir``.

    Falls back to the absolute path when no relative path exists
    (e.g. different drives on Windows).
    """
    try:
        return os.path.relpath(os.path.abspath(to_path), os.path.abspath(from_dir))
    except ValueError:
        return os.path.abspath(to_path)


class ObjectStoreLinker:
    """
    Symlinks attachable items from an objects repository into a git dir.

    Linking is all-or-nothing per call: if any symlink fails, the links
    and directory created by that call are removed before the error is
    raised.

    Example:
        linker = ObjectStoreLinker()
        result = linker.attach(Path("/shared/objs"), Path("/proj/.git"))
        print(result.linked_items)  # ['objects', 'hooks']
    """

    def __init__(self, items=ATTACHABLE_ITEMS):
        self.items = tuple(items)

    def plan(self, source_dir: Path, target_dir: Path) -> AttachResult:
        """Decide which items to link without touching the filesystem."""
        source_dir, target_dir = Path(source_dir), Path(target_dir)
        result = AttachResult(source_dir=source_dir, target_dir=target_dir)

        for item in self.items:
            source = source_dir / item
            target = target_dir / item
            if not source.exists():
                result.missing.append(item)
                continue
            # lexists: a dangling symlink still occupies the name
            if os.path.lexists(target):
                logger.debug(f"Skipping {item}: {target} already exists")
                result.existing.append(item)
                continue
            result.planned.append(LinkAction(
                item=item,
                source=source,
                target=target,
                link_value=relative_link(target_dir, source),
            ))

        return result

    def attach(self, source_dir: Path, target_dir: Path) -> AttachResult:
        """
        Create target_dir if needed and link every planned item into it.

        Raises:
            FilesystemError: directory or symlink creation failed; nothing
                created by this call is left behind
        """
        result = self.plan(source_dir, target_dir)
        target_dir = result.target_dir

        if not target_dir.exists():
            try:
                target_dir.mkdir(parents=True)
            except OSError as e:
                raise FilesystemError(
                    f"fail to create {target_dir}: {e}", str(target_dir)
                ) from e
            result.created_dir = True
            logger.debug(f"Created {target_dir}")

        for action in result.planned:
            try:
                os.symlink(action.link_value, action.target)
            except OSError as e:
                self.rollback(result)
                raise FilesystemError(
                    f"fail to link {action.item} into {target_dir}: {e}",
                    str(action.target),
                ) from e
            result.linked.append(action)
            logger.debug(f"Linked {action.target} -> {action.link_value}")

        return result

    def rollback(self, result: AttachResult) -> None:
        """Undo what attach created. Problems are logged, not raised."""
        for action in reversed(result.linked):
            try:
                if os.path.islink(action.target):
                    os.unlink(action.target)
            except OSError as e:
                logger.warning(f"Rollback could not remove {action.target}: {e}")
        result.linked = []

        if result.created_dir:
            # rmtree unlinks symlinks without following them
            try:
                shutil.rmtree(result.target_dir)
            except OSError as e:
                logger.warning(f"Rollback could not remove {result.target_dir}: {e}")
            else:
                result.created_dir = False
        logger.warning(f"Rolled back attach of {result.target_dir}")
