def format_output(letters: str, group_size: int = 5, line_length: int = 25) -> str:
    """
    Pretty-print a letter sequence for display.

    Letters are split into groups of ``group_size`` separated by a space,
    and a line break follows every ``line_length`` letters. The break is
    placed after the group separator, so full lines keep a trailing space.

    Args:
        letters: Cipher output (uppercase letters only)
        group_size: Letters per group
        line_length: Letters per line

    Returns:
        Formatted string
    """
    formatted = []

    for i, letter in enumerate(letters):
        if i != 0 and i % group_size == 0:
            formatted.append(" ")
        if i != 0 and i % line_length == 0:
            formatted.append("\n")
        formatted.append(letter)

    return "".join(formatted)
