"""UpTask — project and task tracking backend.

A GraphQL API where users register, sign in, and manage their own
projects and the tasks inside them. Every project and task belongs
to the user who created it, and only that user can change it.
"""

__version__ = "0.1.0"
