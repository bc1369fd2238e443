from .basic import set_log_level, ScreenHandler
