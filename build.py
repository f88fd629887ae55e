import os
import subprocess
import sys
from pathlib import Path

def main():
    """Bundle the desktop application using PyInstaller"""
    project_root = Path(__file__).parent

    # Configuration
    app_name = "Worklog"
    entry_point = "main.py"

    # Optional YAML defaults shipped next to the executable
    # Windows uses ";" as separator, Linux ":"
    sep = ";" if os.name == "nt" else ":"
    add_data = [
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

    # Only the sqlite driver is used
    args.append("--exclude-module=MySQLdb")
    args.append("--exclude-module=psycopg2")
    args.append("--exclude-module=pysqlite2")

    if os.name == 'nt':
        args.append("--exclude-module=AppKit")
        args.append("--exclude-module=Cocoa")
        args.append("--exclude-module=Foundation")

    # Entry point
    args.append(entry_point)

    print("=" * 50)
    print(f"Building {app_name}...")
    print(f"Command: {' '.join(args)}")
    print("=" * 50)

    try:
        subprocess.run([sys.executable, "-m", "PyInstaller", "--version"], check=True, capture_output=True)
        subprocess.run([sys.executable, "-m"] + args, check=True)

        print("\nBuild successful!")
        print(f"Output folder: {project_root / 'dist' / app_name}")

    except subprocess.CalledProcessError as e:
        print(f"\nError: Build failed with exit code {e.returncode}")
        print("Ensure 'pyinstaller' is installed: pip install -e .[build]")
        sys.exit(1)
    except FileNotFoundError:
        print("\nError: PyInstaller not found.")
        print("Please install it: pip install -e .[build]")
        sys.exit(1)

if __name__ == "__main__":
    main()
