"""
Command-line interface for the atendo analyzer.

- Parsing sentences into CD forms
- Checking a lexicon file
- Showing lexicon information
"""
import sys
import argparse
import json
import logging

from tqdm import tqdm

from atendo.errors import AtendoError
from atendo.lexicon import Lexicon, default_lexicon_path
from atendo.logging_config import ProgressLogger, setup_logging
from atendo.pipeline import AtendoPipeline


def _load_lexicon(args) -> Lexicon:
    try:
        return Lexicon.load(args.lexicon)
    except (OSError, ValueError, AtendoError) as e:
        print(f"ERROR loading lexicon: {e}", file=sys.stderr)
        sys.exit(1)


def _print_trace(trace, output_format):
    if output_format == 'trace':
        print(trace.to_json())
    elif output_format == 'json':
        print(json.dumps(trace.result, indent=2, ensure_ascii=False))
    else:
        print(trace.final_response)


def cmd_parse(args):
    """Parse sentences into conceptual-dependency forms."""
    lexicon = _load_lexicon(args)
    pipeline = AtendoPipeline(lexicon=lexicon, carry_over=args.carry_over)

    if args.text:
        sentences = [args.text]
    elif args.file:
        with open(args.file, 'r', encoding='utf-8') as f:
            sentences = [line.strip() for line in f if line.strip()]
    else:
        print("Enter a sentence:")
        sentences = [input().strip()]

    # tqdm for the console, ProgressLogger for the log file
    batch = len(sentences) > 1
    progress = ProgressLogger(total=len(sentences), desc="Parsing") if batch else None
    failures = 0
    for i, sentence in enumerate(tqdm(sentences, desc="Parsing", unit=" sentences", disable=not batch)):
        if progress:
            progress.update(1, item_desc=f"Sentence {i+1}: {sentence[:50]}")
        trace = pipeline.run(sentence)
        if trace.error:
            failures += 1
            if args.format == 'trace':
                print(trace.to_json())
            print(f"ERROR: {sentence}: {trace.error['type']}: {trace.error['message']}", file=sys.stderr)
        else:
            _print_trace(trace, args.format)

    if progress:
        progress.close()
    if failures:
        sys.exit(1)


def cmd_check(args):
    """Compile every lexicon entry and report the broken ones."""
    lexicon = _load_lexicon(args)
    errors = lexicon.validate()
    if not errors:
        print(f"OK: {len(lexicon)} entries compiled")
        return
    for word, message in sorted(errors.items()):
        print(f"{word}: {message}")
    print(f"{len(errors)} of {len(lexicon)} entries are malformed", file=sys.stderr)
    sys.exit(1)


def cmd_info(args):
    """Display lexicon information."""
    lexicon = _load_lexicon(args)
    path = args.lexicon or default_lexicon_path()

    print("=== atendo lexicon ===\n")
    print(f"Python: {sys.version.split()[0]}")
    print(f"Lexicon: {path}")
    print(f"Entries: {len(lexicon)}")
    print(f"Start word: {lexicon.start_word or '(none)'}")
    words = sorted(word for word in lexicon.words() if word != lexicon.start_word)
    print(f"Words: {' '.join(words)}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='atendo',
        description='atendo: expectation-driven sentence analyzer producing conceptual-dependency forms',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  atendo parse "Jack went to the store"
  atendo parse --file sentences.txt --format json
  atendo parse "Jack bought a kite" --format trace --debug
  atendo check --lexicon my_lexicon.json
"""
    )
    parser.add_argument('--lexicon', help='Lexicon JSON file (default: bundled, or $ATENDO_LEXICON)')
    parser.add_argument('--debug', action='store_true', help='Verbose logging, including every fired request')
    parser.add_argument('--log-file', help='Also write logs to this file')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    parser_parse = subparsers.add_parser('parse', help='Parse a sentence')
    parser_parse.add_argument('text', nargs='?', help='Sentence to parse')
    parser_parse.add_argument('-f', '--file', help='Read sentences from file, one per line')
    parser_parse.add_argument('--format', choices=['sexpr', 'json', 'trace'], default='sexpr',
                              help='Output format (default: sexpr)')
    parser_parse.add_argument('--carry-over', action='store_true',
                              help='Keep slot values between sentences instead of resetting them')
    parser_parse.set_defaults(func=cmd_parse)

    parser_check = subparsers.add_parser('check', help='Validate every lexicon entry')
    parser_check.set_defaults(func=cmd_check)

    parser_info = subparsers.add_parser('info', help='Display lexicon information')
    parser_info.set_defaults(func=cmd_info)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(log_file=args.log_file, level=logging.WARNING, debug=args.debug)
    args.func(args)


if __name__ == '__main__':
    main()
