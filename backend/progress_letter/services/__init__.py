"""Progress Letter - Services"""
