#!/usr/bin/env python
"""
Stub function and module used as a setuptools entry point.
"""
import sys
from treejson import make_parser


# Entry point for setuptools-installed script
def main():
    parser = make_parser()

    params = parser.parse_args()
    if not hasattr(params, 'func'):
        parser.print_help()
        sys.exit(1)

    return_code = params.func(params)

    sys.exit(return_code)


# Run when called as `python -m treejson`, here for good measure.
if __name__ == "__main__":
    main()
