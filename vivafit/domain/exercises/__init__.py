"""
Exercises Domain

Daily exercise log and progress overview. Every record belongs to a single
account and is only visible to that account.

- repository.py: owner-scoped queries and writes
- service.py: today's exercises, completion toggling, daily progress
- router.py: HTTP endpoints
"""
