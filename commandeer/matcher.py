"""
Command matching: pick the registered command addressed by the positionals.

A command is a candidate when its path equals a non-empty prefix of the
positional tokens. The longest candidate wins, so "remote.add" beats "remote"
for ["remote", "add", "origin"]. The matched path is removed from the front of
the positionals and what remains are the command's own parameters.

With no candidate the result is (None, positionals) and the caller falls back
to its default handling.
"""


def match(positionals, registry, /):
    """
    return (CommandSpec | None, remaining positionals).
    """
    positionals = list(positionals)
    closest = None
    for length, token in enumerate(positionals, 1):
        # commands are keyed by their dotted path; a segment never contains a dot
        if "." in token:
            break
        if (command := registry.find(positionals[:length])) is not None:
            closest = command
    if closest is None:
        return None, positionals
    return closest, positionals[len(closest.path):]


__all__ = (
    "match",
)
