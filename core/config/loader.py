import configparser
import os
from pathlib import Path


class ConfigLoader:
    def __init__(self, config_path=None):
        # 自动定位项目根目录 (core/config/*)
        self.project_root = Path(__file__).resolve().parents[2]
        self.config_path = Path(config_path) if config_path else (self.project_root / "conf" / "settings.ini")

        self.config = configparser.ConfigParser()
        # settings.ini is optional: defaults + env vars cover a fresh checkout
        if self.config_path.exists():
            self.config.read(self.config_path, encoding="utf-8")

    @property
    def loaded(self):
        return bool(self.config.sections())

    def get(self, section, key, fallback=None):
        """获取配置值并自动展开用户路径 (~)"""
        val = self.config.get(section, key, fallback=fallback)
        if val and "~" in val:
            return os.path.expanduser(val)
        return val

    def data_dir(self):
        """Dataset directory: env > settings.ini > <project>/data/public."""
        env = os.environ.get("GEARFINDER_DATA_DIR", "").strip()
        if env:
            return Path(os.path.expanduser(env))
        val = self.get("GEARFINDER", "DATA_DIR")
        if val:
            return Path(val)
        return self.project_root / "data" / "public"


# === 测试代码 ===
if __name__ == "__main__":
    cfg = ConfigLoader()
    print(f"Project Root: {cfg.project_root}")
    print(f"Data Dir: {cfg.data_dir()}")
