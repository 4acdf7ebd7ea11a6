"""
Notes API Client.

HTTP access to the remote notes API (httpx). The home screen only sees
the NoteStore protocol; HttpNoteStore is the production implementation.
"""
