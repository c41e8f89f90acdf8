"""Configuração do pytest para o serviço de assistência ao formulário."""

import sys
from pathlib import Path

# src/ para imports absolutos (ai, api, app, config, utils) e a raiz para tests.fakes
_root = Path(__file__).parent.parent
for path in (_root / "src", _root):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
