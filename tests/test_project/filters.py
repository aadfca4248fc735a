"""Filters used by the test project."""


def add_source(merge_vars, **kwargs):
    """Tag merge vars with their origin."""
    return {**merge_vars, "SOURCE": "settings"}
