"""Environment settings for building component documentation bundles."""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

COMPONENT_IDS = (
    'alert',
    'badge',
    'button',
    'checkbox',
    'combobox',
    'heading',
    'icon',
    'input',
    'multi-select',
    'pagination',
    'progress',
    'radio-group',
    'select',
    'separator',
    'skeleton',
    'slider',
    'switch',
    'table',
    'tabs',
    'text',
    'textarea',
    'toast',
)


class Settings(BaseSettings):
    if Path('.env').exists():
        model_config = SettingsConfigDict(
            env_prefix='MD_NODES_', env_file='.env', env_file_encoding='utf-8', extra='ignore'
        )
    else:
        model_config = SettingsConfigDict(env_prefix='MD_NODES_')

    # Directory holding one <component_id>/README.md per component
    components_dir: Path = Path.cwd() / 'components'

    component_ids: Annotated[list[str], NoDecode] = list(COMPONENT_IDS)

    # Generated bundle
    output_file: Path = Path('generated') / 'component-docs.json'

    # Logging level
    logging_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = 'INFO'

    @field_validator('component_ids', mode='before')
    def split_ids(cls, ids: str | list[str] | None) -> list[str]:
        if not ids:
            return []
        elif isinstance(ids, str):
            return [i.strip() for i in ids.split(',') if i.strip()]
        elif isinstance(ids, list):
            return ids
        else:
            raise ValueError(
                f'component_ids must be a comma separated string or a list, not {type(ids)}'
            )
