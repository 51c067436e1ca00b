class ConfigurationException(Exception):
    pass
