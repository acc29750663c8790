"""Processing module for opportunity import and normalization."""

from studiomate.processing.normalizer import OpportunityNormalizer

__all__ = ["OpportunityNormalizer"]
