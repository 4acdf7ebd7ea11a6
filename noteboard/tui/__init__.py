"""
Terminal front-end (Textual).

Renders the home screen controller and supplies its collaborators:
navigation to the editor, confirmation prompts, and error toasts.
"""
