import logging

from rich.pretty import pprint

from commandeer import *


def init(options):
    pprint({"command": "init", "options": options})


def add(options, *files):
    pprint({"command": "add", "files": files, "options": options})


def remote_add(options, addr=None):
    pprint({"command": "remote.add", "addr": addr, "options": options})


def fallback(options, *parameters):
    pprint({"command": None, "parameters": parameters, "options": options})


program = (
    Program("git")
    .set_version("0.0.1")
    .set_description("A tiny git-like demo")
    .set_default_handler(fallback)
    .option("-v, --verbose", "Enable verbosity")
    .command("init", "Create an empty repository", init)
    .command("add [files ...]", "Add file contents to the index", add)
    .command("remote.add [addr]", "Add a remote", remote_add)
    .option("-c, --config <key>", "Configuration key")
)


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    program.run()
