import os
import subprocess
import sys
from pathlib import Path


def main():
    """Build the application using PyInstaller"""
    project_root = Path(__file__).parent

    # Configuration
    app_name = "TimEvaluator"
    entry_point = "main.py"

    # Windows uses ";" as separator, Linux ":"
    sep = ";" if os.name == "nt" else ":"

    # Assets to include: (source, destination) relative to project root
    add_data = [
        ("app/assets", "app/assets"),
        ("config", "config"),
    ]

    args = [
        "PyInstaller",
        "--noconfirm",
        "--clean",
        "--windowed",  # No console window
        f"--name={app_name}",
    ]

    for src, dst in add_data:
        if (project_root / src).exists():
            args.append(f"--add-data={src}{sep}{dst}")

    # QtCharts is loaded lazily by PySide6
    args.append("--hidden-import=PySide6.QtCharts")
    args.append("--collect-data=qdarktheme")

    args.append(entry_point)

    print("=" * 50)
    print(f"Building {app_name}...")
    print(f"Command: {' '.join(args)}")
    print("=" * 50)

    try:
        subprocess.run([sys.executable, "-m", "PyInstaller", "--version"], check=True, capture_output=True)
        subprocess.run([sys.executable, "-m"] + args, check=True, cwd=project_root)

        print("\nBuild successful!")
        print(f"Executable is located in: {project_root / 'dist' / app_name}")

    except subprocess.CalledProcessError as e:
        print(f"\nError: Build failed with exit code {e.returncode}")
        print("Ensure 'pyinstaller' is installed: pip install pyinstaller")
        sys.exit(1)
    except FileNotFoundError:
        print("\nError: PyInstaller not found.")
        print("Please install it: pip install pyinstaller")
        sys.exit(1)


if __name__ == "__main__":
    main()
