"""Resolver package for the GraphQL schema.

Query and mutation fields delegate to the functions defined in sibling
modules; those functions perform access checks and build the feedback
resolver from the repository carried in the GraphQL context.
"""
