#!/usr/bin/env python

from pylint import lint

lint.Run(['ctxesc', 'tests'])
