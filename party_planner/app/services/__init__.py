"""
Service layer.

``state_store`` holds the page state; ``planner_service`` holds the
controller that keeps the state, the data service and the page in step.
"""
