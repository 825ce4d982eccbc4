from .initialization import InitConfig, PasswordPolicy

__all__ = ['InitConfig', 'PasswordPolicy']
