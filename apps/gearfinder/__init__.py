# -*- coding: utf-8 -*-
"""GearFinder (equipment lookup) service package.

- Backend: FastAPI (ASGI)
- Data: 裝備資料庫.json (equipment array) + id_dict.json (name -> icon id)
- UI: lightweight single-page HTML (served by backend)
"""

__all__ = ["__version__"]
__version__ = "0.3.0"
