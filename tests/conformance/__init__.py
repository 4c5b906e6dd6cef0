"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the share market.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. share_conservation.py - Every corporation's 10 shares are always accounted for,
   each corporation occupies exactly its own ladder cell, and rejected
   operations change nothing

These tests use hypothesis for property-based testing.
"""
