# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Observation stream transformation and temporal resampling for sensor services."""
