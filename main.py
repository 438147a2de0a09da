"""
inc Programming Language - Main Entry Point
Runs source through lexer, parser, semantic analyzer and interpreter
"""

import sys
import argparse
from typing import Callable, List, Optional, Tuple

from parsing import create_parser, create_debug_parser, pretty_print_ast
from semantics import create_analyzer, create_debug_analyzer
from interpreter import create_interpreter, create_debug_interpreter
from error_handling import IncError, describe_error


VERSION = "inc 0.1.0"

# Programs run by --demo: (title, source)
DEMO_PROGRAMS: List[Tuple[str, str]] = [
    ("VALID Program (Expected: 11, 16)", "x=10;print(inc(x));print(inc(15));"),
    ("INVALID Program (Undeclared Var)", "a=1;print(inc(y));"),
    ("INVALID Program (Syntax Error)", "print(inc());"),
    ("EMPTY Program (Expected: no output)", ""),
    ("REDECLARED Variable (Expected: 7)", "x=5;x=7;print(x);"),
]


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='inclang',
      description='inc - declare integers, print them, increment them',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s script.inc               # Run an inc script
  %(prog)s -c "x=1;print(inc(x));"  # Run inline source
  %(prog)s --tokens script.inc      # Show the token stream
  %(prog)s --parse script.inc       # Parse and show the syntax tree
  %(prog)s --analyze script.inc     # Parse and check declarations only
  %(prog)s --demo                   # Run the built-in sample programs
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help='inc script file to execute'
  )

  parser.add_argument(
      '-c', '--code',
      help='Program source passed as a string'
  )

  mode = parser.add_mutually_exclusive_group()

  mode.add_argument(
      '--tokens',
      action='store_true',
      help='Tokenize the source and show the tokens'
  )

  mode.add_argument(
      '--parse',
      action='store_true',
      help='Parse the source and show the syntax tree'
  )

  mode.add_argument(
      '--analyze',
      action='store_true',
      help='Parse and analyze the source without executing it'
  )

  parser.add_argument(
      '--banners',
      action='store_true',
      help='Print progress banners around each stage'
  )

  parser.add_argument(
      '--demo',
      action='store_true',
      help='Run the built-in demonstration programs'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


def run_source(source: str, emit: Callable[[str], None] = print,
               debug: bool = False, banners: bool = False) -> List[str]:
  """Run a program through the whole pipeline and return its output lines

  Fresh stage objects are created for every call. The first IncError raised by
  any stage propagates to the caller.
  """
  parser = create_debug_parser() if debug else create_parser()
  analyzer = create_debug_analyzer() if debug else create_analyzer()
  interpreter = create_debug_interpreter(emit) if debug else create_interpreter(emit=emit)

  program = parser.parse_string(source)

  if banners:
    print("\n--- Starting Semantic Analysis ---")
  analyzer.analyze(program)
  if banners:
    print("Semantic analysis passed successfully.")

  if banners:
    print("\n--- Starting Code Execution (Direct AST Interpretation) ---")
  output = interpreter.interpret(program)
  if banners:
    print("Execution finished successfully.")

  return output


def read_source(script_path: str) -> str:
  """Read a script file, exiting with a message if it cannot be read"""
  try:
    with open(script_path, 'r', encoding='utf-8') as f:
      return f.read()
  except FileNotFoundError:
    print(f"Error: Script file '{script_path}' not found", file=sys.stderr)
    print(f"  Hint: Check the file path and make sure the file exists", file=sys.stderr)
    sys.exit(1)
  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'", file=sys.stderr)
    sys.exit(1)
  except UnicodeDecodeError as e:
    print(f"Error: Cannot decode file '{script_path}': {e}", file=sys.stderr)
    print(f"  Hint: Make sure the file is a text file with UTF-8 encoding", file=sys.stderr)
    sys.exit(1)
  except OSError as e:
    print(f"Error: Cannot read '{script_path}': {e}", file=sys.stderr)
    sys.exit(1)


def report_error(error: IncError, label: str, source: str) -> None:
  """Print a pipeline error for the given source"""
  print(f"{error.kind} error in '{label}': {describe_error(error, source)}", file=sys.stderr)


def show_tokens(source: str) -> None:
  """Print every token of the source"""
  for token in create_parser().tokenize(source):
    print(token)


def show_ast(source: str, debug: bool = False) -> None:
  """Parse the source and print the syntax tree"""
  parser = create_debug_parser() if debug else create_parser()
  program = parser.parse_string(source)
  print(f"Parsed {len(program.statements)} statements:")
  print("=" * 50)
  print(pretty_print_ast(program), end='')


def analyze_source(source: str, debug: bool = False) -> None:
  """Parse and analyze the source without executing it"""
  parser = create_debug_parser() if debug else create_parser()
  analyzer = create_debug_analyzer() if debug else create_analyzer()
  program = parser.parse_string(source)
  analyzer.analyze(program)
  print(f"Analysis passed: {len(program.statements)} statements")


def run_demo(debug: bool = False) -> None:
  """Run each demonstration program, reporting errors and carrying on"""
  for title, code in DEMO_PROGRAMS:
    print(f"\n{'='*42}")
    print(f"TEST: {title}")
    print(f"{'='*42}")
    print("Source Code:")
    print(code)
    try:
      run_source(code, debug=debug, banners=True)
    except IncError as e:
      print(f"\n[Caught Expected Error] {e}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> None:
  """Main entry point for inc"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)

  if args.demo:
    run_demo(debug=args.debug)
    return

  if args.script and args.code is not None:
    arg_parser.error("give either a script file or -c, not both")

  if args.code is not None:
    label, source = "<string>", args.code
  elif args.script:
    label, source = args.script, read_source(args.script)
  else:
    arg_parser.print_help()
    return

  try:
    if args.tokens:
      show_tokens(source)
    elif args.parse:
      show_ast(source, debug=args.debug)
    elif args.analyze:
      analyze_source(source, debug=args.debug)
    else:
      run_source(source, debug=args.debug, banners=args.banners)
  except IncError as e:
    report_error(e, label, source)
    sys.exit(1)


if __name__ == "__main__":
  main()
