import re

from .exceptions import OrcaReadError

ENCODINGS = ['utf-8', 'utf-16', 'latin-1', 'cp1252']

FLOAT_RE = re.compile(r"[-+]?\d*\.\d+(?:[eE][-+]?\d+)?")


def read_text(path):
    """
    Read a whole output file into memory.
    ORCA runs on Windows clusters too, so a few encodings are tried before
    falling back to utf-8 with replacement characters.
    Raises OrcaReadError on any OS level failure.
    """
    content = ""
    for enc in ENCODINGS:
        try:
            with open(path, 'r', encoding=enc) as f:
                content = f.read()
            break
        except UnicodeError:
            continue
        except OSError as e:
            raise OrcaReadError(path, e) from e

    if not content:
        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                content = f.read()
        except OSError as e:
            raise OrcaReadError(path, e) from e
    return content


def to_float(value, default=None):
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def leading_int(label):
    """'2-1A' -> 2, '12' -> 12, 'A' -> None"""
    digits = ""
    for char in label:
        if char.isdigit():
            digits += char
        else:
            break
    return int(digits) if digits else None


def last_float(text):
    """Last float-looking token in a line, e.g. the energy in an XYZ comment."""
    matches = FLOAT_RE.findall(text)
    if not matches:
        return None
    return to_float(matches[-1])


def normalize_element(symbol):
    """'CL', 'cl' -> 'Cl'"""
    symbol = symbol.strip()
    if not symbol:
        return symbol
    return symbol[0].upper() + symbol[1:].lower()
