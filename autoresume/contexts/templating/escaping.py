"""
LaTeX escaping with lightweight inline markup.

LLM output and config text may contain LaTeX special characters and two
markdown-like spans: **bold** and `code`. Spans become \\textbf{} and
\\texttt{} groups with escaped content; everything else is escaped literally.
"""

LATEX_SPECIAL_CHARS = {
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "^": r"\textasciicircum{}",
    "~": r"\textasciitilde{}",
    "\\": r"\textbackslash{}",
}

BOLD_MARKER = "**"
CODE_MARKER = "`"


def escape_plain(text: str) -> str:
    """Escape LaTeX special characters without interpreting markup."""
    return "".join(LATEX_SPECIAL_CHARS.get(char, char) for char in text)


def escape_latex(text: str) -> str:
    """
    Escape text for LaTeX, converting **bold** and `code` spans.

    An unterminated span keeps its opening marker literally, followed by the
    escaped remainder of the text.

    Examples:
        >>> escape_latex("R&D at 100%")
        'R\\\\&D at 100\\\\%'
        >>> escape_latex("**Python**: pandas")
        '\\\\textbf{Python}: pandas'
        >>> escape_latex("`unclosed_code")
        '`unclosed\\\\_code'
    """
    result = []
    i = 0
    length = len(text)

    while i < length:
        if text.startswith(BOLD_MARKER, i):
            start = i + len(BOLD_MARKER)
            end = text.find(BOLD_MARKER, start)
            if end == -1:
                result.append(BOLD_MARKER + escape_latex(text[start:]))
                break
            result.append(r"\textbf{" + escape_latex(text[start:end]) + "}")
            i = end + len(BOLD_MARKER)

        elif text[i] == CODE_MARKER:
            start = i + 1
            end = text.find(CODE_MARKER, start)
            if end == -1:
                result.append(CODE_MARKER + escape_latex(text[start:]))
                break
            result.append(r"\texttt{" + escape_latex(text[start:end]) + "}")
            i = end + 1

        else:
            result.append(LATEX_SPECIAL_CHARS.get(text[i], text[i]))
            i += 1

    return "".join(result)
