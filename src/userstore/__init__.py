"""
userstore: a user repository whose behaviour and error classification do not
depend on which SQL backend executes its statements.
"""
