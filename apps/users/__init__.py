"""Users app package.

Defines the custom user model with its three roles (tenant, property
admin, super admin) and the employee management services used by super
admins. Use ``apps.users.models.CustomUser`` as the AUTH_USER_MODEL
throughout the project.
"""
