"""
KidCalc: Entry point.

A line-oriented keypad: type an expression and press Enter to see how
it is worked out.  Each line is added to the buffer, so after an answer
"+1" keeps going from it.  Commands: :c clear, :b backspace, :h history,
:lang <tag> switch language, :q quit.
"""

import argparse
import logging
import sys

from calculator import Calculator, storage
from narrator import available_languages


def _print_result(result: dict, show_tips: bool, out) -> None:
    for step in result["steps"]:
        print(f"  {step['text']}", file=out)
    if show_tips and result["tips"]:
        print("  --", file=out)
        for tip in result["tips"]:
            print(f"  * {tip['text']}", file=out)


def _print_history(out) -> None:
    for entry in storage.get_history():
        print(f"  {entry['display_expression']} = {entry['display_result']}"
              f"  ({entry['timestamp']})", file=out)


def run(calc: Calculator, lines, out=None, show_tips: bool = True) -> None:
    out = out or sys.stdout
    for raw in lines:
        line = raw.strip()
        if line == ":q":
            break
        if line == ":c":
            calc.clear()
        elif line == ":b":
            calc.backspace()
        elif line == ":h":
            _print_history(out)
        elif line.startswith(":lang"):
            tag = line[len(":lang"):].strip()
            if tag in available_languages():
                calc.language = tag
            else:
                print(f"  languages: {', '.join(available_languages())}", file=out)
        elif line:
            try:
                calc.append(line)
            except ValueError as exc:
                print(f"  {exc}", file=out)
            else:
                result = calc.submit()
                if result is not None:
                    _print_result(result, show_tips, out)
        print(f"[{calc.display}]", file=out)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Step-by-step calculator for kids")
    parser.add_argument("--lang", choices=available_languages(), default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    settings = storage.get_settings()
    calc = Calculator(language=args.lang or settings["language"])
    run(calc, sys.stdin, show_tips=settings["show_tips"])


if __name__ == "__main__":
    main()
