"""
Home Screen Core.

UI-free state for the note list screen:

- list_store: cached notes, pin ordering, search filtering, reload
- selection: multi-select state and tap dispatch (BROWSE / SELECTING)
- mutations: pin toggle and bulk delete against the remote store
- controller: the screen's user actions, composed from the above
"""
