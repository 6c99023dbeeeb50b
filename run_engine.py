#!/usr/bin/env python3
"""
Script de inicio para el MACD Signals Engine
"""

import sys
import os
from pathlib import Path

# Añadir src al path
src_dir = Path(__file__).parent / "src"
sys.path.insert(0, str(src_dir))

def main():
    """Ejecuta el bucle de sondeo + señales MACD."""

    ini = os.getenv("ENGINE_INI", "settings.ini")
    if not Path(ini).exists():
        print(f"❌ No existe el INI: {ini} (usa ENGINE_INI=/ruta/settings.ini)")
        sys.exit(1)

    try:
        from macd_engine.nats.runner import main as run_engine
        print("✅ MACD Signals Engine cargado")
    except ImportError as e:
        print(f"❌ Error importando engine: {e}")
        sys.exit(1)

    print(f"🚀 Iniciando MACD Signals Engine ({ini})...")
    print("📊 Presiona Ctrl+C para detener")
    print("-" * 50)

    try:
        import asyncio
        asyncio.run(run_engine())
    except KeyboardInterrupt:
        print("\n🛑 Engine detenido por el usuario")
    except Exception as e:
        print(f"❌ Error ejecutando engine: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

if __name__ == "__main__":
    main()
