"""
Service layer.

Each service wraps one entity family of the ``neuromkt`` schema.  A
method runs one SQL statement or stored-function call on the
connection it is given (or on one it borrows from the pool) and maps
the rows to pydantic models.  Methods are written as blocking code and
decorated with ``run_in_thread``, so awaiting one runs the query in a
worker thread.  Services never call each other.
"""
