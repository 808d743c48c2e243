"""Chromosome label normalization."""

CHROMOSOME_CODES = {
    "X": 23,
    "Y": 24,
    "MT": 25,
}

MAX_CHROMOSOME_CODE = 25

_CODE_LABELS = {code: label for label, code in CHROMOSOME_CODES.items()}


def normalize_chromosome(label: str | int | None) -> int | None:
    """Normalize a chromosome label to its numeric code.

    Strips a case-insensitive 'chr' prefix. X, Y and MT map to 23, 24 and 25;
    numeric labels are parsed directly.

    Args:
        label: Chromosome label (e.g. "1", "chrX", "MT", 7)

    Returns:
        Code in 1..25, or None if the label cannot be interpreted
    """
    if label is None or isinstance(label, bool):
        return None
    if isinstance(label, int):
        code = label
    else:
        text = str(label).strip()
        if text[:3].lower() == "chr":
            text = text[3:]
        text = text.upper()

        if text in CHROMOSOME_CODES:
            return CHROMOSOME_CODES[text]
        if not text.isascii() or not text.isdigit():
            return None
        try:
            code = int(text)
        except ValueError:
            # over the interpreter's int string-conversion digit limit
            return None

    if 1 <= code <= MAX_CHROMOSOME_CODE:
        return code
    return None


def chromosome_label(code: int) -> str:
    """Return the canonical display label for a chromosome code."""
    return _CODE_LABELS.get(code, str(code))
