"""Minimal demonstration of a tool chat session."""

import sys

from toolbox_core.api.service import describe_backend, open_session, send_message

if __name__ == "__main__":
    session = open_session("summarizer")
    print(describe_backend()["label"])
    result = send_message(session, "请总结附件的主要内容", sys.argv[1:])
    for warning in result["warnings"]:
        print("Warning:", warning)
    print("Assistant:", result["reply"]["content"])
