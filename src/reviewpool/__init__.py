"""Reviewpool - team directory and pull request reviewer assignment.

This package tracks engineering teams, their members, and pull requests,
and assigns code reviewers to each new pull request from the author's team.
"""

__version__ = "0.1.0"
