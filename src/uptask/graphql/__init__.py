"""GraphQL API — Strawberry schema mounted on the FastAPI app.

Learn: One endpoint (/graphql) serves every operation:
1. Queries read the caller's own projects and tasks
2. Mutations register, sign in, and change projects/tasks
3. Resolvers stay thin — they unpack input and call a service

Failures are raised as UpTaskError subclasses and reach the client as
GraphQL errors carrying `extensions.code`.
"""
