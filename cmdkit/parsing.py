"""Line tokenizer for the dispatch loop.

A token is a maximal run of non-whitespace characters. There is no
quoting or escaping: ``greet "a b"`` yields the args ``['"a', 'b"']``.
"""

from typing import List, Tuple


def split_command(line: str) -> Tuple[str, str]:
    """Split a line into the command name and the raw argument text.

    The argument text is stripped of surrounding whitespace but keeps its
    inner spacing, so ``"  command   arg1   arg2  "`` becomes
    ``("command", "arg1   arg2")``. Empty or blank input gives ``("", "")``.
    """
    parts = line.split(None, 1)
    if not parts:
        return "", ""
    command = parts[0]
    rest = parts[1].strip() if len(parts) > 1 else ""
    return command, rest


def split_args(args: str) -> List[str]:
    """Split raw argument text into tokens, collapsing repeated whitespace."""
    return args.split()


def tokenize(line: str) -> Tuple[str, List[str]]:
    """Split a line into ``(command, args)``.

    Never raises for string input; ``""`` and ``"   "`` both give
    ``("", [])``.
    """
    command, rest = split_command(line)
    return command, split_args(rest)
