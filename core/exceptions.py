#!/usr/bin/env python3
"""
Custom exceptions for the matching layer.

Precondition errors are raised by callers before the engine runs; the
scoring code itself never raises. Each exception carries a ``kind`` so
adapters can map it to a not-found or validation response without
string matching.
"""


class MatchingException(Exception):
    """Base exception for matching layer errors."""
    kind = "matching_error"


class JobNotFound(MatchingException):
    """Raised when the job to match against does not exist."""
    kind = "job_not_found"


class CandidateNotFound(MatchingException):
    """Raised when the candidate to match against does not exist."""
    kind = "candidate_not_found"


class NoCandidatesAvailable(MatchingException):
    """Raised when there are no candidates at all to rank.

    Distinct from an empty ranking, which is a valid result.
    """
    kind = "no_candidates_available"


class InvalidFilterParameters(MatchingException):
    """Raised when filters or pagination parameters are invalid."""
    kind = "invalid_filter_parameters"


class InvalidInputError(MatchingException):
    """Raised when a skill, candidate or job record is malformed."""
    kind = "invalid_input"


NOT_FOUND_ERRORS = (JobNotFound, CandidateNotFound, NoCandidatesAvailable)
VALIDATION_ERRORS = (InvalidFilterParameters, InvalidInputError)
