#!/usr/bin/env python3
"""Reads whitespace separated integers from stdin and prints their sum."""
import sys


def main() -> None:
    numbers = [int(token) for token in sys.stdin.read().split()]
    print(sum(numbers))


if __name__ == "__main__":
    main()
