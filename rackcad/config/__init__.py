from .hardware import hw, reload, config_path
