"""

Notes
-----
The coordinate decorators add a `coordtype` attribute to the decorated
function. Coefficients and spaces read it to decide which kind of points the
function expects.
"""
from functools import wraps

def cartesian(func):
    @wraps(func)
    def add_attribute(*args, **kwargs):
        return func(*args, **kwargs)
    add_attribute.__dict__['coordtype'] = 'cartesian'
    return add_attribute

def barycentric(func):
    @wraps(func)
    def add_attribute(*args, **kwargs):
        return func(*args, **kwargs)
    add_attribute.__dict__['coordtype'] = 'barycentric'
    return add_attribute
