#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitCheck - движок отслеживания привычек
Журнал выполнения, серии (streak), календарная сетка и цели

Версия: 1.0.0
"""

__version__ = "1.0.0"

__all__ = ['__version__']
