"""Settings package for the NyumbaLink project.

`base.py` holds configuration shared by every environment; `dev.py`,
`prod.py` and `test.py` layer environment specific overrides on top.
"""
