"""artdeploy commands"""
