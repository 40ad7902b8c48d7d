"""CLI entry point: run `pnt file.pnt` or `python -m pnt file.pnt`."""

import logging
import sys
from pathlib import Path


def main(argv=None) -> int:
    import argparse
    from .compiler.driver import CompilerDriver
    from .runtime.runtime import PntRuntime
    from .runtime.values import display
    from .utils.config import DIALECT_PNT, DIALECTS
    from .utils.io_utils import read_source_file

    parser = argparse.ArgumentParser(prog="pnt", description="Run a pnt (.pnt) file.")
    parser.add_argument("file", type=Path, help="Path to .pnt source file")
    parser.add_argument("--dialect", choices=DIALECTS, default=DIALECT_PNT,
                        help="Source dialect (default: pnt)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    path = args.file.resolve()
    if not path.exists():
        sys.stderr.write(f"pnt: error: file not found: {path}\n")
        return 1
    if not path.is_file():
        sys.stderr.write(f"pnt: error: not a file: {path}\n")
        return 1

    try:
        source = read_source_file(path)
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"pnt: error: could not read file: {e}\n")
        return 1

    compiler = CompilerDriver()
    result = compiler.compile(source, str(path), dialect=args.dialect)
    if not result.success:
        if result.has_errors():
            result.reporter.print_errors()
        else:
            sys.stderr.write("pnt: compilation failed\n")
        return 1

    runtime = PntRuntime()
    exec_result = runtime.execute(result)
    if exec_result.error is not None:
        sys.stderr.write(f"{exec_result.error}\n")
        return 1

    print(display(exec_result.value))
    return 0


if __name__ == "__main__":
    sys.exit(main())
