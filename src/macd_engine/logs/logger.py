import logging
import os
from logging.handlers import RotatingFileHandler

# Siempre usar la raíz (donde se ejecuta el main); ENGINE_LOG_DIR lo sobreescribe
LOG_DIR = os.path.abspath(os.getenv("ENGINE_LOG_DIR", os.path.join(os.getcwd(), 'var', 'logs')))
LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'error': logging.ERROR,
}
FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'


class LevelFilter(logging.Filter):
    def __init__(self, level):
        super().__init__()
        self.level = level
    def filter(self, record):
        # WARNING va al fichero de error junto con ERROR/CRITICAL
        if self.level == logging.ERROR:
            return record.levelno >= logging.WARNING
        return record.levelno == self.level

def get_logger(name='macd_engine', log_dir=None, console_level=None):
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    if not getattr(logger, '_custom_handlers', False):
        log_dir = os.path.abspath(log_dir or LOG_DIR)
        os.makedirs(log_dir, exist_ok=True)
        formatter = logging.Formatter(FORMAT)
        # Handler por nivel
        for level_name, level in LOG_LEVELS.items():
            handler = RotatingFileHandler(
                os.path.join(log_dir, f'{level_name}.log'),
                maxBytes=5*1024*1024,  # 5MB por archivo
                backupCount=3
            )
            handler.setLevel(logging.WARNING if level == logging.ERROR else level)
            handler.addFilter(LevelFilter(level))
            handler.setFormatter(formatter)
            logger.addHandler(handler)
        if console_level is not None:
            stream = logging.StreamHandler()
            stream.setLevel(console_level)
            stream.setFormatter(formatter)
            logger.addHandler(stream)
        logger._custom_handlers = True
    return logger
