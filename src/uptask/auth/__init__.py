"""Authentication.

Learn: Users sign in with email/password and receive a signed JWT.
Every later request carries that JWT in the Authorization header; it is
verified once per request and the resulting CallerIdentity is what all
ownership checks compare against.
"""
