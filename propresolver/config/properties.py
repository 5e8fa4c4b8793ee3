"""
属性文件解析 - 将配置源文本解析为 key/value

格式约定（与 .properties 一致）：
- 每行一个 `key = value`，首个未转义的 `=`（或 `:`）为分隔符
- key/value 两端空白去除
- 空行、`#`/`!` 开头的注释行跳过
- 行尾奇数个 `\\` 表示续行，下一行去掉行首空白后拼接
- 转义：`\\t` `\\n` `\\r` `\\f` `\\uXXXX`，其余 `\\x` 取字面 x（如 `\\=` `\\:` `\\\\`）
- 没有分隔符的行忽略
- 同一 key 重复出现时后者生效

外部覆盖文件支持 YAML（.yaml/.yml），嵌套映射展平为点分 key。
"""

from __future__ import annotations

import string
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from ..interfaces import ConfigSourceError


COMMENT_PREFIXES = ("#", "!")
SEPARATORS = ("=", ":")
YAML_SUFFIXES = (".yaml", ".yml")
ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def parse_properties(text: str, source: str = "<string>") -> dict[str, str]:
    """
    解析 properties 文本

    Raises:
        ConfigSourceError: 非法的 \\uXXXX 转义
    """
    result: dict[str, str] = {}
    for line in _logical_lines(text):
        index = _separator_index(line)
        if index <= 0:
            continue

        key = _unescape(line[:index].strip(), source)
        if key:
            result[key] = _unescape(_strip_value(line[index + 1:]), source)
    return result


def _logical_lines(text: str) -> Iterator[str]:
    """合并续行，跳过空行与注释行"""
    pending: str | None = None
    for raw_line in text.splitlines():
        line = raw_line.lstrip()
        if pending is None and (not line or line.startswith(COMMENT_PREFIXES)):
            continue

        if _is_continued(line):
            pending = (pending or "") + line[:-1]
            continue

        yield (pending or "") + line
        pending = None

    # 文件末行以 `\` 结尾
    if pending is not None:
        yield pending


def _is_continued(line: str) -> bool:
    """行尾是否为奇数个反斜杠"""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _separator_index(line: str) -> int:
    """返回首个未转义分隔符位置，没有则 -1"""
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in SEPARATORS:
            return i
        i += 1
    return -1


def _strip_value(raw: str) -> str:
    """去除两端空白，保留被转义的末尾空白（`\\ `）"""
    value = raw.lstrip()
    stripped = value.rstrip()
    if len(stripped) < len(value) and _is_continued(stripped):
        return value[:len(stripped) + 1]
    return stripped


def _unescape(text: str, source: str) -> str:
    if "\\" not in text:
        return text

    out: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != "\\":
            out.append(char)
            i += 1
            continue

        i += 1
        if i >= len(text):
            break
        char = text[i]
        if char == "u":
            digits = text[i + 1:i + 5]
            if len(digits) != 4 or any(d not in string.hexdigits for d in digits):
                raise ConfigSourceError(f"非法的\\uXXXX转义: {source}: \\u{digits}", source)
            out.append(chr(int(digits, 16)))
            i += 5
        else:
            out.append(ESCAPES.get(char, char))
            i += 1
    return "".join(out)


def load_properties_bytes(data: bytes, source: str, encoding: str = "utf-8") -> dict[str, str]:
    """解码并解析 properties 字节（严格解码）"""
    try:
        text = data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise ConfigSourceError(f"配置源解码失败({encoding}): {source}: {e}", source) from e
    return parse_properties(text, source)


def parse_yaml_properties(text: str, source: str) -> dict[str, str]:
    """解析 YAML 配置并展平为点分 key"""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigSourceError(f"YAML配置解析失败: {source}: {e}", source) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigSourceError(f"YAML配置顶层必须是映射: {source}", source)

    result: dict[str, str] = {}
    _flatten(data, "", result)
    return result


def _flatten(data: dict[Any, Any], prefix: str, out: dict[str, str]) -> None:
    for k, v in data.items():
        key = f"{prefix}{k}"
        if isinstance(v, dict):
            _flatten(v, f"{key}.", out)
        else:
            out[key] = _to_str(v)


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join(_to_str(v) for v in value)
    return str(value)


def read_properties_file(path: str | Path, encoding: str = "utf-8") -> dict[str, str]:
    """读取外部配置文件（按后缀选择格式）"""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ConfigSourceError(f"配置文件读取失败: {path}: {e}", str(path)) from e

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise ConfigSourceError(f"配置源解码失败({encoding}): {path}: {e}", str(path)) from e
        return parse_yaml_properties(text, str(path))

    return load_properties_bytes(data, str(path), encoding)
