from hypothesis import HealthCheck, settings

# Hypothesis builds its unicode character table on first use, which can trip
# the too_slow health check on a cold cache.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")
