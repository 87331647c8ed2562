"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from pathlib import Path
import logging


DEFAULT_MAX_BLOB_SIZE = 1024 * 1024  # 1MB
DEFAULT_BATCH_SIZE = 100


def _split_patterns(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [p.strip() for p in value.split(',') if p.strip()]


@dataclass
class GitDiffConfig:
    """git diff 추출 설정"""
    max_blob_size: int = DEFAULT_MAX_BLOB_SIZE
    batch_size: int = DEFAULT_BATCH_SIZE
    git_binary: str = "git"


@dataclass
class SecurityConfig:
    """경로 검증 설정"""
    base_dir: str = field(default_factory=os.getcwd)


@dataclass
class IgnoreConfig:
    """무시 패턴 설정"""
    patterns: List[str] = field(default_factory=list)
    ignore_file: str = ".mcpignore"


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class ServerConfig:
    """HTTP 서버 설정"""
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    git_diff: GitDiffConfig = field(default_factory=GitDiffConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        return cls(
            git_diff=GitDiffConfig(
                max_blob_size=int(os.getenv("MAX_GIT_BLOB_SIZE_BYTES", str(DEFAULT_MAX_BLOB_SIZE))),
                batch_size=int(os.getenv("GIT_DIFF_BATCH_SIZE", str(DEFAULT_BATCH_SIZE))),
                git_binary=os.getenv("GIT_BINARY", "git"),
            ),
            security=SecurityConfig(
                base_dir=os.getenv("ANALYZER_BASE_DIR", os.getcwd()),
            ),
            ignore=IgnoreConfig(
                patterns=_split_patterns(os.getenv("ANALYZER_IGNORE_PATTERNS")),
                ignore_file=os.getenv("ANALYZER_IGNORE_FILE", ".mcpignore"),
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=int(os.getenv("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            ),
            server=ServerConfig(
                host=os.getenv("SERVER_HOST", "0.0.0.0"),
                port=int(os.getenv("SERVER_PORT", "8000")),
            ),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(
            git_diff=GitDiffConfig(**config_data.get('git_diff', {})),
            security=SecurityConfig(**config_data.get('security', {})),
            ignore=IgnoreConfig(**config_data.get('ignore', {})),
            logging=LoggingConfig(**config_data.get('logging', {})),
            server=ServerConfig(**config_data.get('server', {})),
            debug=config_data.get('debug', False),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        # blob 크기 제한 검증
        if self.git_diff.max_blob_size <= 0:
            errors.append("Max blob size must be positive")

        # 배치 크기 검증
        if self.git_diff.batch_size <= 0:
            errors.append("Batch size must be positive")

        # 기준 디렉토리 확인
        base_dir = Path(self.security.base_dir)
        if not base_dir.is_dir():
            errors.append(f"Base directory does not exist: {self.security.base_dir}")

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'git_diff': {
                'max_blob_size': self.git_diff.max_blob_size,
                'batch_size': self.git_diff.batch_size,
                'git_binary': self.git_diff.git_binary,
            },
            'security': {
                'base_dir': self.security.base_dir,
            },
            'ignore': {
                'patterns': list(self.ignore.patterns),
                'ignore_file': self.ignore.ignore_file,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'server': {
                'host': self.server.host,
                'port': self.server.port,
            },
            'debug': self.debug,
        }


class ConfigManager:
    """설정 관리자"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

    def update_config(self, **kwargs) -> None:
        """설정 업데이트"""
        config_dict = self._config.to_dict()

        for key, value in kwargs.items():
            if '.' in key:
                # 중첩된 설정 (예: 'git_diff.max_blob_size')
                section, field_name = key.split('.', 1)
                if section in config_dict:
                    config_dict[section][field_name] = value
            else:
                # 최상위 설정
                config_dict[key] = value

        # 새로운 설정 객체 생성
        self._config = AppConfig(
            git_diff=GitDiffConfig(**config_dict['git_diff']),
            security=SecurityConfig(**config_dict['security']),
            ignore=IgnoreConfig(**config_dict['ignore']),
            logging=LoggingConfig(**config_dict['logging']),
            server=ServerConfig(**config_dict['server']),
            debug=config_dict['debug'],
        )

        self._config.validate()
        self._setup_logging()

    def _setup_logging(self) -> None:
        """로깅 설정"""
        logging.basicConfig(
            level=getattr(logging, self._config.logging.level.upper()),
            format=self._config.logging.format,
        )

        # 파일 로깅이 설정된 경우 로테이션 설정
        if self._config.logging.file_path:
            from logging.handlers import RotatingFileHandler

            handler = RotatingFileHandler(
                self._config.logging.file_path,
                maxBytes=self._config.logging.max_file_size,
                backupCount=self._config.logging.backup_count,
            )
            handler.setFormatter(logging.Formatter(self._config.logging.format))

            # 루트 로거에 핸들러 추가
            root_logger = logging.getLogger()
            root_logger.addHandler(handler)


# 전역 설정 관리자 인스턴스 (최초 사용 시 생성)
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """전역 설정 관리자 반환"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> AppConfig:
    """현재 설정 반환"""
    return get_config_manager().config


def update_config(**kwargs) -> None:
    """설정 업데이트"""
    get_config_manager().update_config(**kwargs)


def reset_config(config: Optional[AppConfig] = None) -> None:
    """전역 설정 교체 (None 이면 다음 사용 시 환경 변수에서 다시 로드)"""
    global _config_manager
    _config_manager = ConfigManager(config) if config is not None else None
