from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Blackstar CMS client")
    ap.add_argument("--url", default=None, help="Server URL; defaults to $BLACKSTAR_URL or http://localhost:2999")
    ap.add_argument("--token", default=None, help="Bearer token; defaults to $BLACKSTAR_TOKEN")
    sub = ap.add_subparsers(dest="cmd", required=True)

    # Query chunks by exactly one of ids / names / tags
    g = sub.add_parser("get")
    g.add_argument("--id", dest="ids", type=int, action="append", default=None, help="Chunk id; can repeat")
    g.add_argument("--name", dest="names", action="append", default=None, help="Chunk name; can repeat")
    g.add_argument("--tag", dest="tags", action="append", default=None, help="Tag (AND query); can repeat")

    sub.add_parser("get-all")
    sub.add_parser("tags")

    cr = add_chunk_subparser(sub, "create")
    cr.add_argument("--id", type=int, default=0)
    up = add_chunk_subparser(sub, "update")
    up.add_argument("--id", type=int, required=True)

    dl = sub.add_parser("delete")
    dl.add_argument("--id", type=int, required=True)

    sub.add_parser("admin-search").add_argument("--q", required=True)
    sub.add_parser("media-search").add_argument("--q", required=True)

    um = sub.add_parser("upload-media")
    um.add_argument("--file", dest="files", action="append", required=True, help="Path of a file to upload; can repeat")

    sub.add_parser("delete-media").add_argument("--hash", required=True)
    sub.add_parser("url-for").add_argument("--id", type=int, required=True)

    return ap


def add_chunk_subparser(sub, cmd):
    """
    Adds a create or update subparser carrying the editable chunk fields.

    Args:
        sub: The subparsers object from argparse.
        cmd: The name of the subcommand to add.

    Returns:
        argparse.ArgumentParser: The configured subparser.
    """
    result = sub.add_parser(cmd)
    result.add_argument("--name", required=True)
    result.add_argument("--tag", dest="tags", action="append", default=[], help="Tag label; can repeat")
    result.add_argument("--value", default="")
    return result
