"""Command line interface and interactive pager."""
