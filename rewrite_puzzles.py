#!/usr/bin/env python3
"""rewrite_puzzles.py

String substitution puzzles: write a list of find-and-replace rules that
turns every generated input into the expected output.

Key features:
- Plain-text rule files (``left=right`` and ``left:=right`` once rules).
- Priority-ordered rewrite engine with a hard step ceiling.
- Reproducible test cases and level codes from seeded generators.
- JSON level packs with Python test-case scripts.

Run:
  python rewrite_puzzles.py packs
  python rewrite_puzzles.py level BCDF12
  python rewrite_puzzles.py run solution.txt --level BCDF12
  python rewrite_puzzles.py --help
"""

from __future__ import annotations

import argparse
import importlib.util
import json
import os
import random
import sys
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, TextIO, cast

MAX_EXECUTIONS = 100_000
NUM_EXAMPLES = 5
NUM_TEST_CASES = 100
TEST_CASE_SEED = 12345

PACKS_FOLDER = "packs"
PACK_JSON_FILE = "pack.json"
DEFAULT_VERSION = "1.0.0"
DEFAULT_WIN_MESSAGE = (
    "Congratulations! You solved all puzzles in the level pack. Good job!"
)

CODE_LENGTH = 6
# No vowels: codes should not spell words or be misread (0/O, 1/I).
CODE_CHARS = "BCDFGHJKLMNPQRSTVWXYZ1234567890"
MAX_CODE_ATTEMPTS = 1_000

RULE_SEPARATOR = "="
ONCE_MARKER = ":"


# -------------------------
# Errors / Validation
# -------------------------


class ConfigError(ValueError):
    pass


class MalformedRuleError(ConfigError):
    """A rule-file line that has an ``=`` but is not a valid rule."""

    def __init__(self, line: str, reason: str, line_number: int | None = None):
        self.line = line
        self.reason = reason
        self.line_number = line_number
        where = f" on line {line_number}" if line_number is not None else ""
        super().__init__(f"invalid rule '{line}'{where}: {reason}")


class ScriptError(ConfigError):
    pass


class CodeAssignmentError(ConfigError):
    pass


class CodeLookupError(LookupError):
    pass


class ValidationFailure(Exception):
    """Base class for a program failing one of the level's test cases."""

    case_index: int


class TimedOut(ValidationFailure):
    def __init__(self, case_index: int, max_steps: int):
        self.case_index = case_index
        self.max_steps = max_steps
        super().__init__(
            f"test case {case_index}: program exceeded maximum number of "
            f"executions ({max_steps})"
        )


class Mismatch(ValidationFailure):
    def __init__(self, case_index: int, got: str, expected: str):
        self.case_index = case_index
        self.got = got
        self.expected = expected
        super().__init__(
            f"test case {case_index}: string does not match expected output\n"
            f"  Given:    {got}\n"
            f"  Expected: {expected}"
        )


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(msg)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_list(x: Any, path: str) -> list[Any]:
    _require(isinstance(x, list), f"{path} must be an array")
    return cast(list[Any], x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(dict[str, Any], x)


def _warn(msg: str) -> None:
    print(f"warning: {msg}", file=sys.stderr)


# -------------------------
# Rule model
# -------------------------


@dataclass(frozen=True)
class Rule:
    pattern: str
    replacement: str
    once: bool = False

    def __str__(self) -> str:
        marker = ONCE_MARKER if self.once else ""
        return f"{self.pattern}{marker}{RULE_SEPARATOR}{self.replacement}"


@dataclass(frozen=True)
class Program:
    """Rules in priority order: the first matching rule is applied."""

    rules: tuple[Rule, ...]

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)


@dataclass
class ExecutionState:
    # indices of once rules already applied during the current run
    consumed: set[int] = field(default_factory=set)


@dataclass(frozen=True)
class TestCase:
    input: str
    expected: str


# -------------------------
# Rule parsing
# -------------------------


def parse_rule_line(line: str) -> Rule | None:
    """Parse one rule-file line.

    Returns None for lines without ``=`` (comments and blank lines). The text
    on each side of ``=`` is taken verbatim, so either side may be empty.
    """
    separator = line.find(RULE_SEPARATOR)
    if separator < 0:
        return None

    if line.count(RULE_SEPARATOR) > 1:
        raise MalformedRuleError(line, f"more than one '{RULE_SEPARATOR}'")

    if ONCE_MARKER not in line:
        return Rule(line[:separator], line[separator + 1 :])

    if line.count(ONCE_MARKER) > 1 or line.find(ONCE_MARKER) != separator - 1:
        raise MalformedRuleError(
            line,
            f"'{ONCE_MARKER}' may appear only once, directly before "
            f"'{RULE_SEPARATOR}'",
        )
    return Rule(line[: separator - 1], line[separator + 1 :], once=True)


def parse_program(text: str) -> Program:
    """Parse a whole rule file. The first bad line aborts the parse."""
    rules: list[Rule] = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        line = line.removesuffix("\r")
        try:
            rule = parse_rule_line(line)
        except MalformedRuleError as e:
            raise MalformedRuleError(line, e.reason, line_number) from None
        if rule is not None:
            rules.append(rule)
    return Program(tuple(rules))


def load_program(path: str) -> Program:
    with open(path, encoding="utf-8", newline="") as f:
        return parse_program(f.read())


# -------------------------
# Rewrite engine
# -------------------------


def step(
    program: Program, text: str, state: ExecutionState
) -> tuple[str, Rule] | None:
    """Apply the first matching rule to the leftmost occurrence of its pattern.

    Once rules listed in ``state.consumed`` are skipped even if they match;
    a once rule that fires is added to it. Returns None when nothing matches.
    """
    for index, rule in enumerate(program.rules):
        if rule.once and index in state.consumed:
            continue
        if rule.pattern not in text:
            continue

        if rule.once:
            state.consumed.add(index)
        return text.replace(rule.pattern, rule.replacement, 1), rule

    return None


# -------------------------
# Execution driver
# -------------------------


TranscriptEntry = tuple[Rule, str]


@dataclass(frozen=True)
class Terminated:
    output: str
    steps: int
    transcript: tuple[TranscriptEntry, ...] = ()


@dataclass(frozen=True)
class Exhausted:
    steps: int


ExecutionResult = Terminated | Exhausted


def run(
    program: Program, text: str, max_steps: int, *, keep_transcript: bool = True
) -> ExecutionResult:
    """Rewrite ``text`` until no rule matches or ``max_steps`` rules were applied.

    Reaching the ceiling gives Exhausted even if the program would have
    stopped on the next step. A rule with an empty pattern always matches, so
    programs containing one only end here.
    """
    _require(
        isinstance(max_steps, int) and not isinstance(max_steps, bool),
        "max_steps must be an integer",
    )
    _require(max_steps >= 0, "max_steps must be >= 0")

    state = ExecutionState()
    transcript: list[TranscriptEntry] = []

    for steps in range(max_steps):
        applied = step(program, text, state)
        if applied is None:
            return Terminated(text, steps, tuple(transcript))

        text, rule = applied
        if keep_transcript:
            transcript.append((rule, text))

    return Exhausted(max_steps)


# -------------------------
# Seeded sequences / codes
# -------------------------


def seeded_stream(seed: int | str | bytes) -> Iterator[int]:
    """Yield an endless stream of 32-bit values from a Mersenne Twister.

    ``random.Random`` seeds ints, strings and bytes the same way on every
    platform, so equal seeds always give equal streams. Call again to restart.
    """
    rng = random.Random(seed)
    while True:
        yield rng.getrandbits(32)


def preview_seed() -> int:
    # Preview examples should differ between runs; validation never uses this.
    return random.randrange(2**32)


def draw_code(
    values: Iterator[int], *, alphabet: str = CODE_CHARS, length: int = CODE_LENGTH
) -> str:
    return "".join([alphabet[next(values) % len(alphabet)] for _ in range(length)])


@dataclass(frozen=True)
class CodeAssignment:
    """Unique codes for ordinals ``0 .. len(codes) - 1``, in order."""

    codes: tuple[str, ...]

    def __post_init__(self) -> None:
        _require(len(set(self.codes)) == len(self.codes), "codes must be unique")

    @classmethod
    def from_seed(cls, seed: int | str | bytes, count: int) -> CodeAssignment:
        return assign_codes(seeded_stream(seed), count)

    def __len__(self) -> int:
        return len(self.codes)

    @property
    def starting_code(self) -> str | None:
        return self.codes[0] if self.codes else None

    def ordinal(self, code: str) -> int | None:
        try:
            return self.codes.index(code)
        except ValueError:
            return None

    def code_for(self, ordinal: int) -> str:
        _require(0 <= ordinal < len(self.codes), f"no code for ordinal {ordinal}")
        return self.codes[ordinal]

    def next_code(self, code: str) -> str | None:
        index = self.ordinal(code)
        if index is None or index + 1 >= len(self.codes):
            return None
        return self.codes[index + 1]


def assign_codes(
    values: Iterator[int],
    count: int,
    *,
    alphabet: str = CODE_CHARS,
    length: int = CODE_LENGTH,
    max_attempts: int = MAX_CODE_ATTEMPTS,
) -> CodeAssignment:
    """Draw one code per ordinal, redrawing when a code is already taken.

    Each ordinal gets at most ``max_attempts`` draws so a bad stream or an
    overfull scope fails with CodeAssignmentError instead of spinning.
    """
    _require(count >= 0, "count must be >= 0")
    _require(len(alphabet) > 0 and length > 0, "code alphabet and length must be set")
    if count > len(alphabet) ** length:
        raise CodeAssignmentError(
            f"cannot assign {count} distinct codes of length {length} "
            f"from {len(alphabet)} symbols"
        )

    codes: list[str] = []
    taken: set[str] = set()
    for ordinal in range(count):
        for _ in range(max_attempts):
            code = draw_code(values, alphabet=alphabet, length=length)
            if code not in taken:
                break
        else:
            raise CodeAssignmentError(
                f"no free code for ordinal {ordinal} after {max_attempts} draws"
            )
        taken.add(code)
        codes.append(code)

    return CodeAssignment(tuple(codes))


# -------------------------
# Validation harness
# -------------------------


def validate(
    program: Program,
    test_cases: Iterable[TestCase],
    *,
    max_steps: int = MAX_EXECUTIONS,
    out: TextIO | None = None,
) -> None:
    """Run every test case in order; raise on the first failure.

    Raises TimedOut or Mismatch (both ValidationFailure) with the 1-based case
    index. When ``out`` is given, a step-by-step transcript is written to it.
    """
    for case_index, case in enumerate(test_cases, start=1):
        if out is not None:
            print(f"===== Test case {case_index}: =====", file=out)
            print(f"  Input:  {case.input}", file=out)
            print(f"  Output: {case.expected}\n", file=out)

        result = run(program, case.input, max_steps, keep_transcript=out is not None)
        if isinstance(result, Exhausted):
            raise TimedOut(case_index, max_steps)

        if out is not None:
            for rule, text in result.transcript:
                print(f"Rule: {rule}\n{text}\n", file=out)
            print("Finished", file=out)

        if result.output != case.expected:
            raise Mismatch(case_index, result.output, case.expected)

        if out is not None:
            print(f"Passed test case {case_index}\n", file=out)


# -------------------------
# Level test-case scripts
# -------------------------


TestCaseGenerator = Callable[[random.Random], Sequence[str]]


def _forget_helper_modules(folder: str, preloaded: set[str]) -> None:
    # helpers are imported by bare name; another pack may ship its own "words"
    for name in set(sys.modules) - preloaded:
        path = getattr(sys.modules[name], "__file__", None)
        if path and os.path.abspath(path).startswith(folder + os.sep):
            del sys.modules[name]


def load_test_case_generator(script_path: str) -> TestCaseGenerator:
    """Import a level script and return its ``generate_test_case`` function.

    The script's folder is importable while the script loads so it can share
    helper modules with the other levels of its pack.
    """
    if not os.path.isfile(script_path):
        raise ScriptError(f"level script not found: {script_path}")

    name = os.path.splitext(os.path.basename(script_path))[0]
    spec = importlib.util.spec_from_file_location(f"_level_{name}", script_path)
    if spec is None or spec.loader is None:
        raise ScriptError(f"cannot import level script {script_path}")
    module = importlib.util.module_from_spec(spec)

    folder = os.path.dirname(os.path.abspath(script_path))
    preloaded = set(sys.modules)
    sys.path.insert(0, folder)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ScriptError(f"failed to load {script_path}: {e}") from e
    finally:
        sys.path.remove(folder)
        _forget_helper_modules(folder, preloaded)

    generate = getattr(module, "generate_test_case", None)
    if not callable(generate):
        raise ScriptError(f"{script_path} does not define generate_test_case(rng)")
    return cast(TestCaseGenerator, generate)


def generate_test_cases(script_path: str, seed: int, count: int) -> list[TestCase]:
    _require(count >= 0, "count must be >= 0")
    generate = load_test_case_generator(script_path)
    rng = random.Random(seed)

    cases: list[TestCase] = []
    for n in range(1, count + 1):
        try:
            pair = generate(rng)
        except Exception as e:
            raise ScriptError(
                f"generate_test_case failed on case {n} in {script_path}: {e}"
            ) from e

        if not (
            isinstance(pair, (tuple, list))
            and len(pair) == 2
            and all(isinstance(s, str) for s in pair)
        ):
            raise ScriptError(
                f"generate_test_case in {script_path} must return "
                f"(input, output) strings; got {pair!r}"
            )
        cases.append(TestCase(pair[0], pair[1]))
    return cases


# -------------------------
# Level packs
# -------------------------


@dataclass(frozen=True)
class Level:
    name: str
    description: str
    script: str


@dataclass(frozen=True)
class LevelPack:
    id: str
    name: str
    version: str
    description: str
    levels: tuple[Level, ...]
    win_message: str
    folder: str
    codes: CodeAssignment

    @property
    def starting_code(self) -> str:
        return self.codes.code_for(0)

    def level_from_code(self, code: str) -> tuple[int, Level] | None:
        """Return ``(level_number, level)`` with 1-based numbering."""
        index = self.codes.ordinal(code)
        if index is None:
            return None
        return index + 1, self.levels[index]

    def next_level_code(self, code: str) -> str | None:
        return self.codes.next_code(code)

    def script_path(self, level: Level) -> str:
        return os.path.join(self.folder, level.script)


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            return cast(dict[str, Any], json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def parse_level(obj: Any, path: str) -> Level:
    obj = _as_dict(obj, path)
    script = _as_str(obj.get("script"), f"{path}.script")
    _require(len(script) > 0, f"{path}.script must be non-empty")
    return Level(
        name=_as_str(obj.get("name"), f"{path}.name"),
        description=_as_str(obj.get("description", ""), f"{path}.description"),
        script=script,
    )


def parse_pack(obj: dict[str, Any], folder: str) -> LevelPack:
    obj = _as_dict(obj, "root")

    pack_id = _as_str(obj.get("id"), "id")
    _require(len(pack_id) > 0, "id must be non-empty")
    version = _as_str(obj.get("version", DEFAULT_VERSION), "version")

    levels = tuple(
        parse_level(level, f"levels[{i}]")
        for i, level in enumerate(_as_list(obj.get("levels"), "levels"))
    )
    _require(len(levels) > 0, "No levels provided in pack file")

    win_message = obj.get("winMessage")
    if win_message is None:
        win_message = DEFAULT_WIN_MESSAGE

    return LevelPack(
        id=pack_id,
        name=_as_str(obj.get("name"), "name"),
        version=version,
        description=_as_str(obj.get("description", ""), "description"),
        levels=levels,
        win_message=_as_str(win_message, "winMessage"),
        folder=folder,
        codes=CodeAssignment.from_seed(f"{pack_id}-{version}", len(levels)),
    )


def load_pack(folder: str) -> LevelPack:
    path = os.path.join(folder, PACK_JSON_FILE)
    try:
        return parse_pack(load_json(path), folder)
    except ConfigError as e:
        raise ConfigError(f"{path}: {e}") from e


@dataclass(frozen=True)
class Catalog:
    """Loaded packs keyed by pack code, in code order."""

    packs: dict[str, LevelPack]

    def pack(self, code: str) -> LevelPack | None:
        return self.packs.get(code)

    def find_levels(
        self, level_code: str, pack_code: str | None = None
    ) -> list[tuple[str, int, Level]]:
        """Find ``(pack_code, level_number, level)`` for a level code.

        Packs that share an id and version also share level codes, so without
        a pack code the result may hold more than one match.
        """
        candidates = list(self.packs.items())
        if pack_code is not None:
            candidates = [item for item in candidates if item[0] == pack_code]

        found: list[tuple[str, int, Level]] = []
        for code, pack in candidates:
            match = pack.level_from_code(level_code)
            if match is not None:
                found.append((code, match[0], match[1]))
        return found


def load_catalog(packs_dir: str = PACKS_FOLDER) -> Catalog:
    """Load every ``<packs_dir>/*/pack.json``.

    A broken pack is reported and skipped. Folders are visited in name order
    so pack codes do not depend on directory listing order.
    """
    try:
        entries = sorted(os.listdir(packs_dir))
    except OSError as e:
        _warn(f"failed to load level packs: {e}")
        return Catalog({})

    packs: list[LevelPack] = []
    for entry in entries:
        folder = os.path.join(packs_dir, entry)
        if not os.path.isfile(os.path.join(folder, PACK_JSON_FILE)):
            continue
        try:
            packs.append(load_pack(folder))
        except (ConfigError, OSError) as e:
            _warn(f"failed to load level pack '{entry}': {e}")

    codes = CodeAssignment.from_seed(PACK_JSON_FILE, len(packs))
    return Catalog(dict(sorted(zip(codes.codes, packs), key=lambda item: item[0])))


def select_level(
    catalog: Catalog, level_code: str, pack_code: str | None
) -> tuple[LevelPack, int, Level]:
    if pack_code is not None and catalog.pack(pack_code) is None:
        raise CodeLookupError(f"Unknown level pack code '{pack_code}'")

    found = catalog.find_levels(level_code, pack_code)
    if not found:
        raise CodeLookupError(f"Unknown level code '{level_code}'")
    if len(found) > 1:
        choices = "\n".join(
            f"  {code} = {catalog.packs[code].name}" for code, _, _ in found
        )
        raise CodeLookupError(
            f"Ambiguous level code '{level_code}'.\n"
            f"Please specify one of the following level packs with --pack:\n"
            f"{choices}"
        )

    code, level_number, level = found[0]
    return catalog.packs[code], level_number, level


# -------------------------
# CLI / Help
# -------------------------

HELP_EPILOG = r"""
RULE FILES (run)

A rule file is plain text with one rule per line:

  <left>=<right>
      Replace the first (leftmost) occurrence of <left> with <right>.
      Can be applied any number of times.

  <left>:=<right>
      Same, but applied at most once per test case.

  Lines without '=' are ignored and can be used as comments.
  Nothing is trimmed: spaces on either side are part of the rule, and either
  side may be empty.

  A line with more than one '=', or with ':' anywhere except directly before
  the '=', is an error.

Execution

  At every step the rules are checked from top to bottom and the first one
  whose left side occurs in the string is applied. The program stops when no
  rule matches; the final string must equal the expected output.

  A program stops being evaluated after 100000 steps. An empty left side
  matches every string, so a rule like "=x" never lets a program stop.

LEVEL PACKS

  <packs-dir>/<folder>/pack.json

    {
      "id": "tutorial",
      "name": "Tutorial",
      "version": "1.0.0",
      "description": "First steps.",
      "winMessage": "optional",
      "levels": [
        {"name": "Swap", "description": "Turn every a into b.", "script": "swap.py"}
      ]
    }

  Each level script defines:

    def generate_test_case(rng):
        ...
        return input_string, expected_output

  where rng is a random.Random instance. Test cases for "run" always use the
  same seed, so failures are reproducible.

Examples

  python rewrite_puzzles.py packs
  python rewrite_puzzles.py level BCDF12
  python rewrite_puzzles.py run solution.txt --level BCDF12 --quiet
"""


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="rewrite_puzzles.py",
        description="Fun string substitution puzzles.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    p.add_argument(
        "--packs-dir",
        default=PACKS_FOLDER,
        help=f"Folder containing level packs. Default: {PACKS_FOLDER}",
    )

    sub = p.add_subparsers(dest="cmd", required=True, metavar="{packs,level,run}")

    pp = sub.add_parser(
        "packs",
        help="List the loaded level packs, or show one pack.",
    )
    pp.add_argument("--pack", default=None, help="Code of a level pack to show.")

    pl = sub.add_parser(
        "level",
        help="Show a level's description with a few example test cases.",
    )
    pl.add_argument("level_code", help="Code of the level.")
    pl.add_argument(
        "--pack", default=None, help="Level pack code, if the level code is ambiguous."
    )

    pr = sub.add_parser(
        "run",
        help="Check a rule file against a level's test cases.",
    )
    pr.add_argument("rules", help="Path to the rule file.")
    pr.add_argument("--level", required=True, dest="level_code", help="Level code.")
    pr.add_argument(
        "--pack", default=None, help="Level pack code, if the level code is ambiguous."
    )
    pr.add_argument(
        "--quiet",
        action="store_true",
        help="Only report the result, not every rewrite step.",
    )

    pc = sub.add_parser("codes", help=argparse.SUPPRESS)
    pc.add_argument("--pack", default=None)

    return p


# -------------------------
# Commands
# -------------------------


def _print_level_codes(pack: LevelPack, indent: str = "") -> None:
    for number, (code, level) in enumerate(zip(pack.codes.codes, pack.levels), 1):
        print(f"{indent}{code} = Level {number}: {level.name}")


def cmd_packs(catalog: Catalog, pack_code: str | None) -> None:
    if pack_code is None:
        print("--- Loaded Level Packs: ---")
        for code, pack in catalog.packs.items():
            print(f"{code} = {pack.name}")
            print(f"  -> Level 1 Code: {pack.starting_code}\n")
        return

    pack = catalog.pack(pack_code)
    if pack is None:
        raise CodeLookupError(f"Unknown level pack code '{pack_code}'")

    print(f"Level Pack: {pack.name}")
    print(f"  Version: {pack.version}")
    print(f"  Code: {pack_code}")
    print(f"\n{pack.description}")
    print(f"\nLevel 1 Code: {pack.starting_code}")


def cmd_level(catalog: Catalog, level_code: str, pack_code: str | None) -> None:
    pack, level_number, level = select_level(catalog, level_code, pack_code)

    print(f"Level {level_number}: {level.name}")
    print(f"  Code: {level_code}\n")
    print(f"{level.description}\n")
    print("Examples:\n")

    script = pack.script_path(level)
    try:
        examples = generate_test_cases(script, preview_seed(), NUM_EXAMPLES)
    except ScriptError as e:
        print(f"Failed to load and run level script: {e}")
        return

    for case in examples:
        print(f"Input:  {case.input}")
        print(f"Output: {case.expected}\n")


def cmd_run(
    catalog: Catalog,
    rules_path: str,
    level_code: str,
    pack_code: str | None,
    quiet: bool,
) -> int:
    pack, level_number, level = select_level(catalog, level_code, pack_code)
    program = load_program(rules_path)

    print(f"Level {level_number}: {level.name}")
    print(f"  Code: {level_code}\n")

    print("----- Loaded Rules: -----")
    for rule in program:
        print(rule)
    print()

    cases = generate_test_cases(pack.script_path(level), TEST_CASE_SEED, NUM_TEST_CASES)
    try:
        validate(program, cases, out=None if quiet else sys.stdout)
    except ValidationFailure as e:
        print(f"Error! {e}")
        return 1

    print("Success! All test cases passed!\n")

    next_code = pack.next_level_code(level_code)
    if next_code is not None:
        print(f"Level {level_number + 1} code: {next_code}")
    else:
        print(pack.win_message)
    return 0


def cmd_codes(catalog: Catalog, pack_code: str | None) -> None:
    if pack_code is not None:
        pack = catalog.pack(pack_code)
        if pack is None:
            raise CodeLookupError(f"Unknown level pack code '{pack_code}'")
        _print_level_codes(pack)
        return

    for code, pack in catalog.packs.items():
        print(f"{code} = {pack.name}")
        _print_level_codes(pack, indent="  ")
        print()


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    try:
        catalog = load_catalog(args.packs_dir)
        if args.cmd == "packs":
            cmd_packs(catalog, args.pack)
        elif args.cmd == "level":
            cmd_level(catalog, args.level_code, args.pack)
        elif args.cmd == "run":
            return cmd_run(catalog, args.rules, args.level_code, args.pack, args.quiet)
        elif args.cmd == "codes":
            cmd_codes(catalog, args.pack)
        else:
            raise AssertionError("unreachable")
    except CodeLookupError as e:
        print(f"Error! {e.args[0]}", file=sys.stderr)
        return 1
    except MalformedRuleError as e:
        print(f"Rule error: {e}", file=sys.stderr)
        return 2
    except ScriptError as e:
        print(f"Script error: {e}", file=sys.stderr)
        return 2
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
