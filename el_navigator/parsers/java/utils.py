from __future__ import annotations


def blank_comments(text: str) -> str:
    """Replace `//` and `/* */` comments with spaces, keeping newlines and
    string/char literals intact so offsets and line numbers stay valid."""
    out: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        nxt = text[i + 1] if i + 1 < length else ""
        if char == "/" and nxt == "/":
            end = text.find("\n", i)
            end = length if end == -1 else end
            out.append(" " * (end - i))
            i = end
        elif char == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            end = length if end == -1 else end + 2
            out.append("".join(c if c in "\r\n" else " " for c in text[i:end]))
            i = end
        elif char in "\"'":
            end = _literal_end(text, i)
            out.append(text[i:end])
            i = end
        else:
            out.append(char)
            i += 1
    return "".join(out)


def _literal_end(text: str, start: int) -> int:
    quote = text[start]
    i = start + 1
    while i < len(text):
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == quote or char == "\n":
            return i + 1
        i += 1
    return len(text)


def line_at(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def decapitalize(name: str) -> str:
    if not name:
        return name
    return name[0].lower() + name[1:]


def capitalize(name: str) -> str:
    if not name:
        return name
    return name[0].upper() + name[1:]
