from __future__ import annotations
import os
from typing import Optional
import yaml
from pydantic import BaseModel, Field, ValidationError
from thermolink.errors import ConfigError

class Paths(BaseModel): temperature:str='/tmp/temp'; status:str='/tmp/status'
class Remote(BaseModel):
    measurement_url:str='http://localhost:8000/measurements'
    status_url:str='http://localhost:8000/status'
    timeout_s:float=Field(default=2.0, gt=0)   # keep below control.interval_s
class Control(BaseModel): interval_s:float=Field(default=3.0, ge=0)
class Daemon(BaseModel):
    detach:bool=True; workdir:str='/'; umask:int=0o133; name:str='thermolink'
class Logging(BaseModel):
    enabled:bool=True; level:str='INFO'; file:Optional[str]=None; syslog:bool=False
class AppConfig(BaseModel):
    paths:Paths=Field(default_factory=Paths); remote:Remote=Field(default_factory=Remote)
    control:Control=Field(default_factory=Control); daemon:Daemon=Field(default_factory=Daemon)
    logging:Logging=Field(default_factory=Logging)

CONFIG_ENV='THERMOLINK_CONFIG'
FOREGROUND_ENV='THERMOLINK_FOREGROUND'
SEARCH_PATHS=['config/config.yaml','config.yaml']

def _truthy(v: str | None) -> bool:
    return v is not None and v.lower() in ('1','true','yes','on')

def load_config(path: str | None = None) -> AppConfig:
    """
    Load the first YAML file found among: explicit path, $THERMOLINK_CONFIG,
    config/config.yaml, config.yaml. Defaults when none exists.
    THERMOLINK_FOREGROUND=1 forces daemon.detach off.
    """
    cfg = AppConfig()
    for p in ([path] if path else []) + [os.getenv(CONFIG_ENV)] + SEARCH_PATHS:
        if p and os.path.exists(p):
            try:
                with open(p, 'r') as f:
                    cfg = AppConfig.model_validate(yaml.safe_load(f) or {})
            except (yaml.YAMLError, ValidationError) as e:
                raise ConfigError(f"invalid config {p}: {e}") from e
            break
    if _truthy(os.getenv(FOREGROUND_ENV)):
        cfg.daemon.detach = False
    return cfg
