# -*- coding: utf-8 -*-
# Engine names carry a leading separator, e.g. "/ceph-nano-mycluster"
NAME_SEPARATOR = "/"

# Image IDs are reported as "sha256:<id>"
IMAGE_DIGEST_PREFIX = "sha256:"

# Returned by the port allocator when every port in range answers
PORT_NOT_FOUND = "notfound"

# Status messages substituted for missing image metadata
IMAGE_NOT_PRESENT = "image is not present, did you remove it?"
UNKNOWN_IMAGE_RELEASE = (
    "unknown image release, are you running an official image?"
)

RELEASE_LABEL = "RELEASE"

# Exec output is framed as <stream:1><pad:3><size:4> followed by payload
STREAM_HEADER_SIZE = 8

CONTAINER_STATE_RUNNING = "running"
CONTAINER_STATE_EXITED = "exited"
