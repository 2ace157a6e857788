#!/usr/bin/env python3
"""git-combine-merges - collapse a chain of merge commits into one."""

from combine_merges.cli import main

if __name__ == "__main__":
    main()
