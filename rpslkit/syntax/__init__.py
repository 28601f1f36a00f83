# -*- coding: utf-8; -*-
