from pydantic_settings import BaseSettings, SettingsConfigDict
import os
import logging
from dotenv import load_dotenv

# 项目根目录绝对路径（统一路径管理）
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

# override=False，优先使用系统环境变量，根目录 .env 仅作为默认值
ROOT_ENV_FILE = os.path.join(PROJECT_ROOT, ".env")
load_dotenv(ROOT_ENV_FILE, override=False)

logger = logging.getLogger(__name__)

DRUG_SOURCES = ("mock", "http")
INTERACTION_MODES = ("local", "remote")


class Settings(BaseSettings):
    """
    系统全局配置类 (Global Settings)
    读取 .env 文件或环境变量，管理药物服务地址、超时与并发等配置项。
    """
    PROJECT_NAME: str = "RxGuard Interaction Service"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    PROJECT_ROOT: str = PROJECT_ROOT
    DEBUG: bool = False

    # Drug Database Service
    # - mock: in-process sample catalogue
    # - http: remote drug-database-service over REST
    DRUG_SOURCE: str = os.getenv("DRUG_SOURCE", "mock")
    DRUG_SERVICE_URL: str = os.getenv("DRUG_SERVICE_URL", "http://localhost:8081")

    # Interaction analysis
    # - local: assess pairs in this process
    # - remote: delegate to a separate interaction-service
    INTERACTION_MODE: str = os.getenv("INTERACTION_MODE", "local")
    INTERACTION_SERVICE_URL: str = os.getenv("INTERACTION_SERVICE_URL", "http://localhost:8082")

    EXTERNAL_CALL_TIMEOUT_SECONDS: float = float(os.getenv("EXTERNAL_CALL_TIMEOUT_SECONDS", "5.0"))
    PAIR_CONCURRENCY: int = int(os.getenv("PAIR_CONCURRENCY", "4"))

    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "false").lower() == "true"

    @property
    def LOG_DIR(self) -> str:
        dir_path = os.path.join(self.PROJECT_ROOT, "logs")
        os.makedirs(dir_path, exist_ok=True)
        return dir_path

    # 单一配置源：固定读取项目根目录 .env，避免受启动目录影响
    model_config = SettingsConfigDict(case_sensitive=True, env_file=ROOT_ENV_FILE, extra="ignore")

    def __init__(self, **kwargs):
        """
        初始化配置 (Initialize Settings)
        未知的 DRUG_SOURCE / INTERACTION_MODE 回退到默认值，并发数至少为 1。
        """
        super().__init__(**kwargs)
        if self.DRUG_SOURCE not in DRUG_SOURCES:
            logger.warning("Unknown DRUG_SOURCE %r, falling back to 'mock'.", self.DRUG_SOURCE)
            self.DRUG_SOURCE = "mock"
        if self.INTERACTION_MODE not in INTERACTION_MODES:
            logger.warning("Unknown INTERACTION_MODE %r, falling back to 'local'.", self.INTERACTION_MODE)
            self.INTERACTION_MODE = "local"
        if self.PAIR_CONCURRENCY < 1:
            self.PAIR_CONCURRENCY = 1
        if self.EXTERNAL_CALL_TIMEOUT_SECONDS <= 0:
            self.EXTERNAL_CALL_TIMEOUT_SECONDS = 5.0

        self.DRUG_SERVICE_URL = self.DRUG_SERVICE_URL.rstrip("/")
        self.INTERACTION_SERVICE_URL = self.INTERACTION_SERVICE_URL.rstrip("/")
        logger.debug(
            "Settings loaded: drug_source=%s interaction_mode=%s concurrency=%d",
            self.DRUG_SOURCE, self.INTERACTION_MODE, self.PAIR_CONCURRENCY,
        )


settings = Settings()
