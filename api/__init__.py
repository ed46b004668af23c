"""API package - HTTP layer: routes, middleware, dependencies"""
