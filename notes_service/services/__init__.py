# Services package init
"""
Notes Service — Services Layer
================================

Service Inventory:
    - NoteService: note lifecycle (list, get, create, update, delete)

Services receive a session per call and can be unit-tested with a mocked
AsyncSession, without HTTP.
"""
