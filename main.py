#!/usr/bin/env python3
"""
Source-tree runner for the qahl CLI

    ./main.py program.json        same as `qahl run program.json`
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from qahlvm.cli.main import cli


def main(argv):
    if len(argv) == 1 and argv[0].endswith('.json'):
        argv = ['run'] + argv
    cli.main(args=argv, prog_name='qahl')


if __name__ == "__main__":
    main(sys.argv[1:])
