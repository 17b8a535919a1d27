"""
Command-line verifier.

Usage:
    equihash-verify --preset zcash --input HEX --solution HEX
    equihash-verify --n 96 --k 5 --input HEX --nonce HEX --solution HEX
    equihash-verify --preset zcash --input HEX --solution-field HEX
"""

import argparse
import logging
import sys

from .errors import ErrorKind
from .params import PRESETS, get_preset
from .solution import read_solution_field
from .verifier import VerifyResult, verify


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='equihash-verify',
        description='Verify an Equihash proof-of-work solution'
    )
    parser.add_argument('--preset', choices=sorted(PRESETS), help='Named (n, k) parameter set')
    parser.add_argument('--n', type=int, help='Hash output width in bits')
    parser.add_argument('--k', type=int, help='Number of collision rounds')
    parser.add_argument('--input', required=True, help='Input (block header) as hex')
    parser.add_argument('--nonce', default='', help='Nonce as hex, appended to input')

    solution = parser.add_mutually_exclusive_group(required=True)
    solution.add_argument('--solution', help='Compact solution as hex')
    solution.add_argument(
        '--solution-field',
        help='CompactSize-prefixed solution as hex, as found in a block'
    )

    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    parser.add_argument('--quiet', '-q', action='store_true', help='No output, exit code only')
    return parser


def _decode_inputs(args):
    """Decode hex arguments to (input, nonce, solution) bytes."""
    input_data = bytes.fromhex(args.input)
    nonce = bytes.fromhex(args.nonce)
    if args.solution is not None:
        solution = bytes.fromhex(args.solution)
    else:
        solution, _ = read_solution_field(bytes.fromhex(args.solution_field))
    return input_data, nonce, solution


def main(argv=None) -> int:
    """Run the verifier. Returns 0 if valid, 1 if not."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    if args.preset and (args.n is not None or args.k is not None):
        parser.error('--preset cannot be combined with --n/--k')

    if args.preset:
        params = get_preset(args.preset)
        n, k = params.n, params.k
    elif args.n is not None and args.k is not None:
        n, k = args.n, args.k
    else:
        parser.error('either --preset or both --n and --k are required')

    try:
        input_data, nonce, solution = _decode_inputs(args)
    except ValueError:
        # Malformed hex, or a truncated solution field (InvalidSolution)
        result = VerifyResult(ErrorKind.INVALID_PARAMS)
    else:
        result = verify(n, k, input_data, nonce, solution)

    if not args.quiet:
        print('valid' if result else f'invalid: {result.error}')

    return 0 if result else 1


if __name__ == '__main__':
    sys.exit(main())
