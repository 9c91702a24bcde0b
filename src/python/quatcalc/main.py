#!/usr/bin/env python3
"""
===============================================================================
QUATCALC - COMMAND-LINE CALCULATOR
===============================================================================
Evaluates a single quaternion operation on operands given in the canonical
text form ("1.00+2.00i-3.00j+4.00k") and prints the result.

USAGE:
    quatcalc norm 2+2i+3j+4k                  # 5.744562646538029
    quatcalc times 1i 1j                      # 0.00+0.00i+0.00j+1.00k
    quatcalc divide-right 1+2i+3j+4k 1        # 1.00+2.00i+3.00j+4.00k
    quatcalc scale 1+1i 2.5                   # 2.50+2.50i+0.00j+0.00k
    quatcalc --strict show "1.00+2.00i"       # reject malformed operands
    quatcalc demo                             # norm and hashes of (2,2,3,4)

EXIT STATUS:
    0  success
    1  arithmetic or format error (e.g. inverse of the zero quaternion)
    2  command-line usage error

DEPENDENCIES:
    numpy, pyyaml
===============================================================================
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

import yaml

from quatcalc.quaternion import (
    Quaternion,
    QuaternionFormatError,
    parse_quaternion,
)


PACKAGE_ROOT = Path(__file__).parent
DEFAULT_CONFIG_PATH = PACKAGE_ROOT.parent.parent.parent / 'config' / 'quatcalc_config.yaml'

DEFAULT_CONFIG = {
    'logging': {'level': 'WARNING', 'file': None},
    'parsing': {'strict': False},
}

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

logger = logging.getLogger('quatcalc.main')


# Operation name -> evaluator over parsed quaternion operands
UNARY_OPERATIONS = {
    'show': lambda a: a,
    'norm': lambda a: a.norm(),
    'is-zero': lambda a: a.is_zero(),
    'conjugate': lambda a: a.conjugate(),
    'opposite': lambda a: a.opposite(),
    'inverse': lambda a: a.inverse(),
    'hash': lambda a: hash(a),
}

BINARY_OPERATIONS = {
    'plus': lambda a, b: a.plus(b),
    'minus': lambda a, b: a.minus(b),
    'times': lambda a, b: a.times(b),
    'divide-right': lambda a, b: a.divide_by_right(b),
    'divide-left': lambda a, b: a.divide_by_left(b),
    'dot': lambda a, b: a.dot_mult(b),
    'equals': lambda a, b: a.equals(b),
}

OPERATIONS = sorted(list(UNARY_OPERATIONS) + list(BINARY_OPERATIONS)
                    + ['scale', 'demo'])


def load_config(config_path: Optional[str] = None) -> dict:
    """
    Load calculator configuration from a YAML file.

    Args:
        config_path: Path to YAML config. Defaults to
            config/quatcalc_config.yaml at the repository root; if that
            default file does not exist the built-in defaults are used.

    Returns:
        Dictionary with 'logging' and 'parsing' sections, missing keys
        filled from DEFAULT_CONFIG.

    Raises:
        FileNotFoundError: If an explicitly given config_path is missing.
        ValueError: If the YAML document or one of its sections is not a
            mapping, or a setting has the wrong type.
    """
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return {section: dict(values) for section, values in DEFAULT_CONFIG.items()}
        config_path = str(DEFAULT_CONFIG_PATH)

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(
            f"Config file {config_path} must contain a mapping, "
            f"got {type(loaded).__name__}"
        )

    config = {}
    for section, defaults in DEFAULT_CONFIG.items():
        values = loaded.get(section)
        if values is None:
            values = {}
        if not isinstance(values, dict):
            raise ValueError(
                f"Config section '{section}' in {config_path} must be a mapping, "
                f"got {type(values).__name__}"
            )
        merged = dict(defaults)
        merged.update(values)
        config[section] = merged

    _check_type(config, 'logging', 'level', str, config_path)
    _check_type(config, 'logging', 'file', (str, type(None)), config_path)
    _check_type(config, 'parsing', 'strict', bool, config_path)
    return config


def _check_type(config: dict, section: str, key: str, expected, config_path: str) -> None:
    value = config[section][key]
    if not isinstance(value, expected):
        raise ValueError(
            f"Config setting '{section}.{key}' in {config_path} has invalid "
            f"value {value!r} ({type(value).__name__})"
        )


def setup_logging(config: dict, level_override: Optional[str] = None) -> None:
    """
    Configure the root logger from the 'logging' config section.

    An already configured root logger keeps its handlers; only its level
    is updated, and no log file is opened.
    """
    level_name = (level_override or config['logging']['level']).upper()
    level = getattr(logging, level_name, logging.WARNING)

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    handlers = [logging.StreamHandler(sys.stderr)]
    if config['logging'].get('file'):
        handlers.append(logging.FileHandler(config['logging']['file'], mode='a'))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)


def run_demo() -> None:
    """Print the norm of (2,2,3,4) and the hashes of two equal copies of it."""
    q1 = Quaternion(2, 2, 3, 4)
    q2 = Quaternion(2, 2, 3, 4)

    print(f"q1 = {q1}")
    print(f"q2 = {q2}")
    print(f"norm(q1) = {q1.norm()}")
    print(f"hash(q1) = {hash(q1)}")
    print(f"hash(q2) = {hash(q2)}")
    print(f"q1 == q2: {q1.equals(q2)}")


def evaluate(operation: str, operands: List[str], strict: bool):
    """
    Parse the operands and apply the named operation.

    Raises:
        ZeroDivisionError: From inverse or division by the zero quaternion.
        QuaternionFormatError: From strict parsing of a malformed operand.
        ValueError: If the scale coefficient is not a number.
    """
    if operation == 'scale':
        q = parse_quaternion(operands[0], strict=strict)
        try:
            coefficient = float(operands[1])
        except ValueError:
            raise ValueError(f"Scale coefficient must be a number, got {operands[1]!r}") from None
        return q.times(coefficient)

    quaternions = [parse_quaternion(text, strict=strict) for text in operands]
    logger.debug("Operation %s on %s", operation, quaternions)

    if operation in UNARY_OPERATIONS:
        return UNARY_OPERATIONS[operation](*quaternions)
    return BINARY_OPERATIONS[operation](*quaternions)


def expected_operands(operation: str) -> int:
    if operation == 'demo':
        return 0
    if operation in UNARY_OPERATIONS:
        return 1
    return 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='quatcalc',
        description='Quaternion calculator: evaluate one operation and print the result',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  quatcalc norm 2+2i+3j+4k              Norm of a quaternion
  quatcalc times 1i 1j                  Hamilton product i*j
  quatcalc divide-left 1+2i+3j+4k 1j    j^-1 * (1+2i+3j+4k)
  quatcalc equals 1.0001 1              Equality within EPS
  quatcalc demo                         Built-in demonstration
  quatcalc inverse -- -1+2i             Use -- before operands starting with "-"
        """
    )

    parser.add_argument('operation', choices=OPERATIONS,
                        help='Operation to evaluate')
    parser.add_argument('operands', nargs='*',
                        help='Quaternion operands (scale takes a quaternion and a number)')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to calculator config YAML')
    parser.add_argument('--strict', action='store_true',
                        help='Reject malformed quaternion operands')
    parser.add_argument('--log-level', type=str, default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Override the configured log level')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point. Parses command line arguments, evaluates the
    requested operation and prints the result to stdout.

    Returns:
        Process exit status (0 on success, 1 on arithmetic/format errors).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    arity = expected_operands(args.operation)
    if len(args.operands) != arity:
        parser.error(
            f"operation '{args.operation}' takes {arity} operand(s), "
            f"got {len(args.operands)}"
        )

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("Cannot load configuration: %s", exc)
        return 1
    setup_logging(config, args.log_level)
    strict = args.strict or bool(config['parsing']['strict'])
    logger.info("Strict parsing: %s", strict)

    if args.operation == 'demo':
        run_demo()
        return 0

    try:
        result = evaluate(args.operation, args.operands, strict)
    except (ZeroDivisionError, QuaternionFormatError, ValueError) as exc:
        logger.error("%s failed: %s", args.operation, exc)
        return 1

    print(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
