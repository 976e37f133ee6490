"""
Consultations Domain

Booking, confirmation, cancellation and completion of consultations between
a client and a professional.

- state_machine.py: which status changes are legal, and for which role
- repository.py: party-scoped queries and writes against the consultations table
- service.py: orchestrates validation, persistence and re-listing
- router.py: HTTP endpoints
"""
