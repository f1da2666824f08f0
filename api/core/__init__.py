"""
Plumbing shared by the school endpoints: the asyncpg pool and its error type,
environment settings, logging setup and the JSON error envelopes. Nothing in
here knows about the `schools` table.
"""
