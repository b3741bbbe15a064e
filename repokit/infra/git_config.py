"""
Git config file store for repokit.

Reads a repository's ``config`` file into memory, lets callers mutate it,
and persists it once with an atomic write (temp file, then rename).
Each GitConfig is an explicit handle; there is no shared cache.
"""

import os
import re
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union
import logging

from ..exit_codes import ConfigIOError

logger = logging.getLogger(__name__)

_SECTION_RE = re.compile(
    r'^\[\s*([A-Za-z0-9.-]+)\s*(?:"((?:[^"\\]|\\.)*)")?\s*\]\s*(?:[#;].*)?$'
)
_NAME_RE = re.compile(r'^([A-Za-z][A-Za-z0-9-]*)\s*(?:=(.*))?$')

_ESCAPES = {'n': '\n', 't': '\t', 'b': '\b', '"': '"', '\\': '\\'}

TRUE_VALUES = ('true', 'yes', 'on', '1')
FALSE_VALUES = ('false', 'no', 'off', '0', '')


@dataclass
class _Section:
    name: str
    subsection: Optional[str] = None
    # [variable name, value]; value None means a bare "name" line (true)
    entries: List[List[Optional[str]]] = field(default_factory=list)

    def matches(self, name: str, subsection: Optional[str]) -> bool:
        return self.name == name and self.subsection == subsection

    def header(self) -> str:
        if self.subsection is None:
            return f"[{self.name}]"
        sub = self.subsection.replace('\\', '\\\\').replace('"', '\\"')
        return f'[{self.name} "{sub}"]'


def split_key(key: str) -> Tuple[str, Optional[str], str]:
    """
    Split a dotted key into (section, subsection, variable).

    Examples:
        "core.bare" -> ("core", None, "bare")
        "remote.origin.url" -> ("remote", "origin", "url")
    """
    parts = key.split('.')
    if len(parts) < 2 or not parts[0] or not parts[-1]:
        raise ValueError(f"invalid config key: {key!r}")
    subsection = '.'.join(parts[1:-1]) or None
    return parts[0].lower(), subsection, parts[-1].lower()


def _parse_value(raw: str) -> str:
    """Parse the right-hand side of a config line (quotes, escapes, comments)."""
    out = []
    pending_space = ''
    in_quotes = False
    i = 0
    raw = raw.strip()
    while i < len(raw):
        ch = raw[i]
        if ch == '\\' and i + 1 < len(raw):
            nxt = raw[i + 1]
            if nxt not in _ESCAPES:
                raise ValueError(f"bad escape sequence: \\{nxt}")
            out.append(pending_space + _ESCAPES[nxt])
            pending_space = ''
            i += 2
            continue
        if ch == '"':
            in_quotes = not in_quotes
        elif not in_quotes and ch in '#;':
            break
        elif not in_quotes and ch.isspace():
            pending_space += ch
        else:
            out.append(pending_space + ch)
            pending_space = ''
        i += 1
    if in_quotes:
        raise ValueError("unterminated quoted value")
    return ''.join(out)


def _format_value(value: str) -> str:
    escaped = (
        value.replace('\\', '\\\\')
        .replace('"', '\\"')
        .replace('\n', '\\n')
        .replace('\t', '\\t')
    )
    if escaped != escaped.strip() or '#' in escaped or ';' in escaped:
        return f'"{escaped}"'
    return escaped


class GitConfig:
    """
    In-memory view of a git config file.

    Example:
        cfg = GitConfig.load(repo.config_file)
        cfg.unset("core.bare")
        cfg.set("core.logAllRefUpdates", "true")
        cfg.save()
    """

    def __init__(self, path: Union[str, Path], sections: Optional[List[_Section]] = None):
        self.path = Path(path)
        self._sections: List[_Section] = sections or []
        self.dirty = False

    @classmethod
    def load(cls, path: Union[str, Path]) -> "GitConfig":
        """Read the whole file. A missing file yields an empty config."""
        path = Path(path)
        if not path.exists():
            return cls(path)
        try:
            text = path.read_text(encoding='utf-8')
        except OSError as e:
            raise ConfigIOError(f"fail to read config {path}: {e}", str(path)) from e
        try:
            return cls(path, cls._parse(text))
        except ValueError as e:
            raise ConfigIOError(f"bad config file {path}: {e}", str(path)) from e

    @staticmethod
    def _parse(text: str) -> List[_Section]:
        sections: List[_Section] = []
        current: Optional[_Section] = None
        for lineno, line in enumerate(text.splitlines(), 1):
            stripped = line.strip()
            if not stripped or stripped[0] in '#;':
                continue
            if stripped.startswith('['):
                match = _SECTION_RE.match(stripped)
                if not match:
                    raise ValueError(f"line {lineno}: bad section header")
                name, sub = match.group(1), match.group(2)
                if sub is not None:
                    sub = re.sub(r'\\(.)', r'\1', sub)
                elif '.' in name:
                    # Deprecated [section.subsection] syntax
                    name, sub = name.split('.', 1)
                    sub = sub.lower()
                current = _Section(name.lower(), sub)
                sections.append(current)
                continue
            match = _NAME_RE.match(stripped)
            if not match or current is None:
                raise ValueError(f"line {lineno}: bad config line")
            raw = match.group(2)
            value = None if raw is None else _parse_value(raw)
            current.entries.append([match.group(1), value])
        return sections

    def _find(self, key: str) -> Iterator[Tuple[_Section, List[Optional[str]]]]:
        name, subsection, var = split_key(key)
        for section in self._sections:
            if section.matches(name, subsection):
                for entry in section.entries:
                    if entry[0].lower() == var:
                        yield section, entry

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the last value of key, like ``git config --get``."""
        found = list(self._find(key))
        if not found:
            return default
        value = found[-1][1][1]
        return 'true' if value is None else value

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        if value is None:
            return default
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        raise ConfigIOError(f"bad boolean config value {value!r} for {key}", str(self.path))

    def has(self, key: str) -> bool:
        return any(True for _ in self._find(key))

    def set(self, key: str, value: str) -> None:
        """Replace the last occurrence of key, or append it to its section."""
        value = str(value)
        found = list(self._find(key))
        if found:
            entry = found[-1][1]
            if entry[1] == value:
                return
            entry[1] = value
            self.dirty = True
            return

        name, subsection, var = split_key(key)
        var_name = key.split('.')[-1]
        for section in reversed(self._sections):
            if section.matches(name, subsection):
                section.entries.append([var_name, value])
                break
        else:
            self._sections.append(_Section(name, subsection, [[var_name, value]]))
        self.dirty = True

    def unset(self, key: str) -> bool:
        """Remove every occurrence of key. Returns True if anything was removed."""
        removed = False
        for section, entry in list(self._find(key)):
            section.entries.remove(entry)
            removed = True
        if removed:
            self.dirty = True
        return removed

    def to_text(self) -> str:
        lines = []
        for section in self._sections:
            lines.append(section.header())
            for var, value in section.entries:
                if value is None:
                    lines.append(f"\t{var}")
                else:
                    lines.append(f"\t{var} = {_format_value(value)}")
        return '\n'.join(lines) + '\n' if lines else ''

    def save(self, force: bool = False) -> bool:
        """
        Persist the config atomically.

        Returns:
            True if the file was written, False if there was nothing to save
        """
        if not self.dirty and not force:
            return False
        try:
            fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp"
            )
        except OSError as e:
            raise ConfigIOError(f"fail to write config {self.path}: {e}", str(self.path)) from e

        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(self.to_text())
            # mkstemp creates 0600; keep the mode git would give the file
            mode = self.path.stat().st_mode & 0o777 if self.path.exists() else 0o644
            os.chmod(temp_path, mode)
            os.replace(temp_path, self.path)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise ConfigIOError(f"fail to write config {self.path}: {e}", str(self.path)) from e

        logger.debug(f"Saved config {self.path}")
        self.dirty = False
        return True
