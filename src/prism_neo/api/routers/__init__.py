"""
prism_neo.api.routers

Router modules mounted by `prism_neo.api.app.create_app`.
"""
