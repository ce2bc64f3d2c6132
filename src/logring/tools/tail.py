# src/logring/tools/tail.py
"""
logring-tail: print the last N lines of files (or stdin) via StringRingBuffer.

    logring-tail -n 20 app.log
    some_cmd | logring-tail -n 5 -r
"""
from __future__ import annotations
import argparse
import sys
from typing import Iterator, List, Optional, TextIO

from logring.core import log
from logring.core.buffer import InvalidCapacity, from_iterable


def _iter_lines(paths: List[str], stdin: TextIO) -> Iterator[str]:
    if not paths:
        for line in stdin:
            yield line.rstrip("\n")
        return
    for p in paths:
        if p == "-":
            yield from (line.rstrip("\n") for line in stdin)
            continue
        with open(p, encoding="utf-8", errors="replace") as fh:
            for line in fh:
                yield line.rstrip("\n")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="logring-tail", description="keep the last N lines of input")
    ap.add_argument("files", nargs="*", help="files to read ('-' or none = stdin)")
    ap.add_argument("-n", "--lines", type=int, default=10, help="number of lines to keep")
    ap.add_argument("-r", "--reverse", action="store_true", help="print newest line first")
    ap.add_argument("--log-level", default=None, help="LOG_LEVEL override")
    return ap


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    log.setup(args.log_level)
    lg = log.get("logring.tail")

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        buf = from_iterable(_iter_lines(args.files, stdin), args.lines)
    except InvalidCapacity as e:
        ap.error(str(e))
    except OSError as e:
        # ไม่ปนกับ output ของ tail
        stderr.write(f"{ap.prog}: {e}\n")
        return 1

    lg.debug("keeping %d line(s)", len(buf))

    def out(s: str) -> None:
        stdout.write(s + "\n")

    if args.reverse:
        buf.each_r(out)
    else:
        buf.each(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
