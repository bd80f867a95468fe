"""Command-line driver for the Lox interpreter: runs a script file, or starts the interactive shell when no file is
given. Installed as the `lox` script.

Exit codes follow sysexits: 65 for syntax errors, 66 for an unreadable script, 70 for runtime errors.
"""

import argparse
import sys
import threading

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell
from lox.syntax.printer import AstPrinter


def dump(path, error_handler, ast):
    """Prints the tokens (or, if ast, the parsed statements) of the script at path without running it."""
    try:
        with open(path, "r", encoding="utf-8") as file:
            source = file.read()
    except OSError:
        error_handler.warn(f"'{path}' could not be opened")
        return Session.EX_NOINPUT

    tokens = Session.scan(source, error_handler)
    if not ast:
        for token in tokens:
            print(token)
    else:
        printer = AstPrinter()
        for stmt in Session.parse(tokens, error_handler):
            print(printer.print(stmt))

    return Session.EX_DATAERR if error_handler.had_error else Session.EX_OK


STACK_SIZE = 256 * 1024 * 1024  # room for Session.RECURSION_LIMIT frames of deep Lox recursion


def run_script(sess, path):
    """Runs the script at path on a thread with a larger stack, so that deep Lox recursion ends in a reported stack
    overflow rather than a crash. Returns the process exit code.
    """
    result = []
    previous = threading.stack_size(STACK_SIZE)
    try:
        thread = threading.Thread(target=lambda: result.append(sess.run_file(path)))
        thread.start()
    finally:
        threading.stack_size(previous)
    thread.join()

    if not result:  # the thread died with an error no handler caught; it is already on stderr
        return Session.EX_SOFTWARE
    return result[0]


def main(argv=None):
    """Runs Lox interpreter. Called from the lox executable script."""
    parser = argparse.ArgumentParser(prog="lox", description="Tree-walking interpreter for the Lox language.")
    parser.add_argument("file", help="script to interpret and run (if empty, goes to interactive mode)", nargs="?")
    parser.add_argument("--tokens", action="store_true", help="print the script's tokens instead of running it")
    parser.add_argument("--ast", action="store_true", help="print the script's syntax tree instead of running it")
    parser.add_argument("--no-color", dest="color", action="store_false", help="do not colour error messages")
    args = parser.parse_args(argv)

    error_handler = ErrorHandler(color=args.color)

    if args.file is None:
        if args.tokens or args.ast:
            parser.error("--tokens and --ast need a script file")
        Shell(Session(error_handler)).cmdloop()
        return Session.EX_OK

    if args.tokens or args.ast:
        return dump(args.file, error_handler, args.ast)

    return run_script(Session(error_handler), args.file)


if __name__ == "__main__":
    sys.exit(main())
