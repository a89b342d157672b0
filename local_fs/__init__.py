"""File-system utilities: paths, predicates, attributes, copy/delete trees, globbing and archives."""

from __future__ import annotations

from .archive import (
    decompress_archive,
    extract_dir_from_archive,
    extract_env_from_archive,
    file_exists_in_archive,
    open_resource_path,
    read_file_from_archive,
    unzip_file,
    zip_files,
)
from .attributes import (
    chmod,
    creation_time,
    get_attribute,
    get_posix_file_permissions,
    last_access_time,
    last_modified_time,
    lookup_group,
    lookup_user,
    octal_to_string_permissions,
    permissions_to_octal,
    permissions_to_string,
    read_attributes,
    require_group,
    require_user,
    set_attribute,
    set_group,
    set_last_access_time,
    set_last_modified_time,
    set_owner,
    set_posix_file_permissions,
    size,
    to_posix_permissions,
)
from .config import LocalFsConfig, load_config, read_env_file
from .copy import (
    copy,
    copy_dir,
    copy_dir_into,
    copy_file_if_changed,
    copy_files,
    copy_recursively,
    copy_with_parents,
    move,
    rename,
    safe_copy,
    safe_rename,
)
from .create import (
    append_to_file,
    children,
    create,
    create_dir_if_not_exists,
    create_directories,
    create_directory,
    create_file,
    create_link,
    create_symlink,
    files_seq,
    list_dir,
    mkdir,
    mkdirs,
    touch,
)
from .delete import delete, delete_dir, delete_if_exists, delete_recursively
from .glob import Matcher, RegexMatcher, compile_glob, find_files, find_files_by, glob, glob_to_regex
from .host import HostFileSystem, LocalFileSystem
from .paths import (
    absolute,
    absolute_path,
    append_to_path,
    as_path,
    base_name,
    canonical_path,
    expand_home,
    extension,
    file,
    filename,
    first_path_segment,
    home,
    join_paths,
    last_path_segment,
    module_path,
    normalize_path,
    normalized,
    parent,
    parent_path,
    parent_paths,
    parents,
    path_module,
    split,
    split_ext,
    split_path,
    stem,
    without_extension,
)
from .predicates import (
    exists,
    is_absolute_path,
    is_child_of,
    is_directory,
    is_executable,
    is_file,
    is_hidden,
    is_readable,
    is_regular_file,
    is_relative_path,
    is_same_file,
    is_symlink,
    is_writable,
)
from .shell import exec_command, which
from .tempfiles import (
    create_temp_directory,
    create_temp_file,
    ephemeral_dir,
    ephemeral_file,
    temp_dir,
    temp_file,
    temp_name,
    tmpdir,
    with_temp_directory,
    with_temp_file,
)
from .types import (
    CopyOptions,
    DeleteOptions,
    DirectoryListing,
    ExecResult,
    FileAttributes,
    PosixPermission,
    TreeEntry,
)
from .walk import TreeWalk, iterate_dir, recursive_files_and_directories, walk
from .workspace import Workspace, with_cwd

__all__ = [
    # archive
    "decompress_archive",
    "extract_dir_from_archive",
    "extract_env_from_archive",
    "file_exists_in_archive",
    "open_resource_path",
    "read_file_from_archive",
    "unzip_file",
    "zip_files",
    # attributes
    "chmod",
    "creation_time",
    "get_attribute",
    "get_posix_file_permissions",
    "last_access_time",
    "last_modified_time",
    "lookup_group",
    "lookup_user",
    "octal_to_string_permissions",
    "permissions_to_octal",
    "permissions_to_string",
    "read_attributes",
    "require_group",
    "require_user",
    "set_attribute",
    "set_group",
    "set_last_access_time",
    "set_last_modified_time",
    "set_owner",
    "set_posix_file_permissions",
    "size",
    "to_posix_permissions",
    # config
    "LocalFsConfig",
    "load_config",
    "read_env_file",
    # copy
    "copy",
    "copy_dir",
    "copy_dir_into",
    "copy_file_if_changed",
    "copy_files",
    "copy_recursively",
    "copy_with_parents",
    "move",
    "rename",
    "safe_copy",
    "safe_rename",
    # create
    "append_to_file",
    "children",
    "create",
    "create_dir_if_not_exists",
    "create_directories",
    "create_directory",
    "create_file",
    "create_link",
    "create_symlink",
    "files_seq",
    "list_dir",
    "mkdir",
    "mkdirs",
    "touch",
    # delete
    "delete",
    "delete_dir",
    "delete_if_exists",
    "delete_recursively",
    # glob
    "Matcher",
    "RegexMatcher",
    "compile_glob",
    "find_files",
    "find_files_by",
    "glob",
    "glob_to_regex",
    # host
    "HostFileSystem",
    "LocalFileSystem",
    # paths
    "absolute",
    "absolute_path",
    "append_to_path",
    "as_path",
    "base_name",
    "canonical_path",
    "expand_home",
    "extension",
    "file",
    "filename",
    "first_path_segment",
    "home",
    "join_paths",
    "last_path_segment",
    "module_path",
    "normalize_path",
    "normalized",
    "parent",
    "parent_path",
    "parent_paths",
    "parents",
    "path_module",
    "split",
    "split_ext",
    "split_path",
    "stem",
    "without_extension",
    # predicates
    "exists",
    "is_absolute_path",
    "is_child_of",
    "is_directory",
    "is_executable",
    "is_file",
    "is_hidden",
    "is_readable",
    "is_regular_file",
    "is_relative_path",
    "is_same_file",
    "is_symlink",
    "is_writable",
    # shell
    "exec_command",
    "which",
    # tempfiles
    "create_temp_directory",
    "create_temp_file",
    "ephemeral_dir",
    "ephemeral_file",
    "temp_dir",
    "temp_file",
    "temp_name",
    "tmpdir",
    "with_temp_directory",
    "with_temp_file",
    # types
    "CopyOptions",
    "DeleteOptions",
    "DirectoryListing",
    "ExecResult",
    "FileAttributes",
    "PosixPermission",
    "TreeEntry",
    # walk
    "TreeWalk",
    "iterate_dir",
    "recursive_files_and_directories",
    "walk",
    # workspace
    "Workspace",
    "with_cwd",
]
