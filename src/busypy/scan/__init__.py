from busypy.scan.annotations import classify
from busypy.scan.package_list import PackageList, check_directories, validate_package
from busypy.scan.scanner import (
    ExportedFunctionVisitor,
    ScannedPackage,
    is_exported,
    is_test_file,
    scan,
    scan_directory,
    scan_packages,
)

__all__ = [
    "ExportedFunctionVisitor",
    "PackageList",
    "ScannedPackage",
    "check_directories",
    "classify",
    "is_exported",
    "is_test_file",
    "scan",
    "scan_directory",
    "scan_packages",
    "validate_package",
]
