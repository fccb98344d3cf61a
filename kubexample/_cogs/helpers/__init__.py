"""
General-purpose helpers not related to the plugin's commands themselves,
which are used to prepare and control the runtime environment.

Helpers do not depend on anything else in the package, and implement
no entities or behaviours of the K8s domain.
"""
