"""
Argument vector normalization.

normalize(argv) rewrites a raw argument vector so the resolver only ever sees
one flag per token:

    -abc            → -a -b -c          (bundled short flags)
    --config=prod   → --config prod     (compressed long form)
    -c=prod         → -c prod           (compressed short form)
    -vc=prod        → -v -c prod        (both, re-scanned from the split point)
    --              → --, then everything after it untouched

The scan is iterative: after each rewrite the same index is examined again,
never recursively. It terminates because every rewrite replaces one token with
strictly shorter ones (and unchanged tokens advance the index).

normalize() is idempotent: normalize(normalize(x)) == normalize(x).
"""
import re

TERMINATOR = "--"

_BUNDLE = re.compile(r"-(?P<flags>[a-z0-9]{2,})", re.IGNORECASE)
_COMPRESSED = re.compile(r"(?P<flag>--[a-z0-9][a-z0-9-]*|-[a-z0-9]+)=(?P<value>.*)", re.IGNORECASE | re.DOTALL)


def expand(token, /):
    """
    rewrite one token, or return None when it is already in normal form.
    """
    if match := _BUNDLE.fullmatch(token):
        return ["-" + flag for flag in match["flags"]]
    if match := _COMPRESSED.fullmatch(token):
        return [match["flag"], match["value"]]
    return None


def normalize(argv, /):
    """
    return the normalized token list for an argument vector (program path excluded).
    """
    if isinstance(argv, str):
        raise TypeError("normalize() argument must be a sequence of strings, not a string")
    tokens = list(argv)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("normalize() argument must contain only strings")

    index = 0
    while index < len(tokens):
        if tokens[index] == TERMINATOR:
            break
        if (replacement := expand(tokens[index])) is None:
            index += 1
            continue
        tokens[index:index + 1] = replacement
    return tokens


__all__ = (
    "TERMINATOR",
    "expand",
    "normalize",
)
