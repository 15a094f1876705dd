"""Reading and writing of sectioned ``key=value`` configuration files."""

from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Any

_MISSING = object()

_NUMBER = re.compile(r"[-+]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][-+]?\d+)?")
_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    '"': '"',
    "'": "'",
    "\\": "\\",
    "/": "/",
}
_COMMENT = ";#"


class ConfigError(ValueError):
    """Raised for text that cannot be parsed or values that cannot be stored."""


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "inf_neg"
    return repr(float(value))


def _format_string(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return _format_string(value)
    if isinstance(value, tuple) and len(value) == 2 and all(map(_is_number, value)):
        if all(isinstance(v, int) for v in value):
            return f"Vector2i({int(value[0])}, {int(value[1])})"
        return f"Vector2({_format_float(value[0])}, {_format_float(value[1])})"
    if isinstance(value, list):
        return "[" + ", ".join(_format(item) for item in value) + "]"
    if isinstance(value, dict):
        items = (f"{_format(k)}: {_format(v)}" for k, v in value.items())
        return "{" + ", ".join(items) + "}"
    raise ConfigError(f"cannot store a value of type {type(value).__name__}")


class _Reader:
    """Cursor over configuration text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, message: str) -> ConfigError:
        line = self.text.count("\n", 0, self.pos) + 1
        return ConfigError(f"line {line}: {message}")

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, char: str) -> None:
        self.skip_space()
        if self.peek() != char:
            raise self.error(f"expected {char!r}")
        self.pos += 1

    def skip_space(self) -> None:
        while not self.at_end() and self.text[self.pos].isspace():
            self.pos += 1

    def skip_blank(self) -> None:
        while True:
            self.skip_space()
            if self.peek() and self.peek() in _COMMENT:
                end = self.text.find("\n", self.pos)
                self.pos = len(self.text) if end < 0 else end
            else:
                return

    def _line_end(self) -> int:
        end = self.text.find("\n", self.pos)
        return len(self.text) if end < 0 else end

    def section_header(self) -> str:
        self.pos += 1
        end = self.text.find("]", self.pos, self._line_end())
        if end < 0:
            raise self.error("unterminated section header")
        name = self.text[self.pos:end].strip()
        self.pos = end + 1
        self.end_of_entry()
        return name

    def key(self) -> str:
        end = self.text.find("=", self.pos, self._line_end())
        if end < 0:
            raise self.error("expected '=' after key")
        key = self.text[self.pos:end].strip()
        if not key:
            raise self.error("empty key")
        self.pos = end + 1
        return key

    def end_of_entry(self) -> None:
        while self.peek() in (" ", "\t"):
            self.pos += 1
        char = self.peek()
        if char and char not in "\r\n" and char not in _COMMENT:
            raise self.error(f"unexpected text {char!r}")

    def value(self) -> Any:
        self.skip_space()
        char = self.peek()
        if not char:
            raise self.error("expected a value")
        if char == '"':
            return self.string()
        if char == "[":
            return self.array()
        if char == "{":
            return self.dictionary()
        if self.text.startswith("-inf", self.pos) and not _IDENT.match(
            self.text, self.pos + 4
        ):
            self.pos += 4
            return -math.inf
        number = _NUMBER.match(self.text, self.pos)
        if number:
            self.pos = number.end()
            token = number.group()
            if any(c in token for c in ".eE"):
                return float(token)
            return int(token)
        ident = _IDENT.match(self.text, self.pos)
        if ident:
            self.pos = ident.end()
            return self.named(ident.group())
        raise self.error(f"unexpected character {char!r}")

    def named(self, name: str) -> Any:
        constants = {
            "true": True,
            "false": False,
            "null": None,
            "nil": None,
            "inf": math.inf,
            "inf_neg": -math.inf,
            "nan": math.nan,
        }
        if name in constants:
            return constants[name]
        if name == "Array" and self.peek() == "[":
            end = self.text.find("]", self.pos)
            if end < 0:
                raise self.error("unterminated array type")
            self.pos = end + 1
            self.expect("(")
            inner = self.value()
            self.expect(")")
            if not isinstance(inner, list):
                raise self.error("typed array holds no array")
            return inner
        if name in ("Vector2i", "Vector2"):
            args = self.arguments()
            if len(args) != 2 or not all(map(_is_number, args)):
                raise self.error(f"{name} takes two numbers")
            if name == "Vector2i":
                return int(args[0]), int(args[1])
            return float(args[0]), float(args[1])
        raise self.error(f"unknown value {name!r}")

    def arguments(self) -> list[Any]:
        self.expect("(")
        return self._sequence(")")

    def _sequence(self, closing: str) -> list[Any]:
        items: list[Any] = []
        self.skip_space()
        if self.peek() == closing:
            self.pos += 1
            return items
        while True:
            items.append(self.value())
            self.skip_space()
            char = self.peek()
            if char == ",":
                self.pos += 1
                self.skip_space()
                if self.peek() == closing:
                    self.pos += 1
                    return items
            elif char == closing:
                self.pos += 1
                return items
            else:
                raise self.error(f"expected ',' or {closing!r}")

    def array(self) -> list[Any]:
        self.pos += 1
        return self._sequence("]")

    def dictionary(self) -> dict[Any, Any]:
        self.pos += 1
        result: dict[Any, Any] = {}
        self.skip_space()
        if self.peek() == "}":
            self.pos += 1
            return result
        while True:
            key = self.value()
            if isinstance(key, (list, dict)):
                raise self.error("dictionary keys must not be arrays or dictionaries")
            self.expect(":")
            result[key] = self.value()
            self.skip_space()
            char = self.peek()
            if char == ",":
                self.pos += 1
                self.skip_space()
                if self.peek() == "}":
                    self.pos += 1
                    return result
            elif char == "}":
                self.pos += 1
                return result
            else:
                raise self.error("expected ',' or '}'")

    def string(self) -> str:
        self.pos += 1
        chars: list[str] = []
        while True:
            if self.at_end():
                raise self.error("unterminated string")
            char = self.text[self.pos]
            self.pos += 1
            if char == '"':
                return "".join(chars)
            if char != "\\":
                chars.append(char)
                continue
            if self.at_end():
                raise self.error("unterminated string")
            code = self.text[self.pos]
            self.pos += 1
            if code == "u":
                digits = self.text[self.pos:self.pos + 4]
                if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                    raise self.error("invalid unicode escape")
                chars.append(chr(int(digits, 16)))
                self.pos += 4
            elif code in _ESCAPES:
                chars.append(_ESCAPES[code])
            else:
                raise self.error(f"invalid escape \\{code}")


def _parse(text: str) -> dict[str, dict[str, Any]]:
    reader = _Reader(text)
    sections: dict[str, dict[str, Any]] = {}
    current = ""
    while True:
        reader.skip_blank()
        if reader.at_end():
            return sections
        if reader.peek() == "[":
            current = reader.section_header()
            sections.setdefault(current, {})
        else:
            key = reader.key()
            value = reader.value()
            reader.end_of_entry()
            sections.setdefault(current, {})[key] = value


class ConfigFile:
    """Values grouped by section and key, stored as a text file."""

    def __init__(self) -> None:
        self._sections: dict[str, dict[str, Any]] = {}

    def loads(self, text: str) -> None:
        """Replace the contents with those parsed from ``text``."""
        self._sections = _parse(text)

    def dumps(self) -> str:
        """Return the contents as configuration text."""
        names = sorted(self._sections, key=lambda name: name != "")
        blocks = []
        for name in names:
            lines = [] if name == "" else [f"[{name}]", ""]
            lines.extend(
                f"{key}={_format(value)}" for key, value in self._sections[name].items()
            )
            blocks.append("\n".join(lines) + "\n")
        return "\n".join(blocks)

    def load(self, path: str | Path) -> None:
        """Replace the contents with those of the file at ``path``."""
        self.loads(Path(path).read_text(encoding="utf-8"))

    def save(self, path: str | Path) -> None:
        """Write the contents to the file at ``path``."""
        Path(path).write_text(self.dumps(), encoding="utf-8")

    def sections(self) -> list[str]:
        """Names of all sections, in the order they were added."""
        return list(self._sections)

    def get_value(self, section: str, key: str, default: Any = _MISSING) -> Any:
        """Value stored under ``section`` and ``key``.

        Returns ``default`` when there is none; raises KeyError if no default
        was given.
        """
        entries = self._sections.get(section, {})
        if key in entries:
            return entries[key]
        if default is _MISSING:
            raise KeyError(f"no value for {key!r} in section {section!r}")
        return default

    def set_value(self, section: str, key: str, value: Any) -> None:
        """Store a value; storing None removes the key, and an emptied section."""
        if value is None:
            entries = self._sections.get(section)
            if entries is not None:
                entries.pop(key, None)
                if not entries:
                    del self._sections[section]
            return
        if "]" in section or "\n" in section:
            raise ConfigError(f"invalid section name {section!r}")
        if not key.strip() or "=" in key or "\n" in key:
            raise ConfigError(f"invalid key {key!r}")
        _format(value)
        self._sections.setdefault(section, {})[key] = value