"""Core logic for signal generation, adaptation, and memory.

This package contains pure business logic with no I/O dependencies
(no network, filesystem, or exchange access). Price history comes in,
decisions and state updates come out; the app layer (trader_app/)
owns fetching, execution, and persistence.
"""
