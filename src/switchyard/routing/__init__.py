"""Routing — path patterns, routes, and route groups.

Routes are registered during setup into ordered groups. Lookup scans
groups, then routes, in registration order; the first route whose
method and pattern accept the request URL wins.
"""
